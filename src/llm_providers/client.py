from dataclasses import dataclass
from typing import Optional
from fastapi import Depends
from openai import AsyncOpenAI, OpenAI

from src.common.exceptions import KnownException
from src.config import Settings, get_settings
from src.llm_providers.constants import LLMProvider


@dataclass
class OpenAIConfig:
    api_key: str
    base_url: Optional[str] = None


def create_client(config: OpenAIConfig) -> OpenAI:
    return OpenAI(api_key=config.api_key, base_url=config.base_url)


def create_async_client(config: OpenAIConfig) -> AsyncOpenAI:
    return AsyncOpenAI(api_key=config.api_key, base_url=config.base_url)


def get_openai_config(provider: LLMProvider, settings: Settings) -> OpenAIConfig:
    if provider == LLMProvider.OPENAI:
        if not settings.OPENAI_API_KEY:
            raise KnownException("OPENAI_API_KEY is not set")
        return OpenAIConfig(api_key=settings.OPENAI_API_KEY)

    if provider == LLMProvider.PERPLEXITY:
        if not settings.PERPLEXITY_API_KEY:
            raise KnownException("PERPLEXITY_API_KEY is not set")
        return OpenAIConfig(
            api_key=settings.PERPLEXITY_API_KEY, base_url=settings.PERPLEXITY_BASE_URL
        )

    raise ValueError(f"Unknown provider: {provider}")


def get_research_openai_client(settings: Settings = Depends(get_settings)) -> OpenAI:
    config = get_openai_config(provider=LLMProvider.PERPLEXITY, settings=settings)
    return create_client(config)


def get_prompt_openai_client(settings: Settings = Depends(get_settings)) -> OpenAI:
    config = get_openai_config(provider=LLMProvider.OPENAI, settings=settings)
    return create_client(config)


def get_async_prompt_openai_client(
    settings: Settings = Depends(get_settings),
) -> AsyncOpenAI:
    config = get_openai_config(provider=LLMProvider.OPENAI, settings=settings)
    return create_async_client(config)
