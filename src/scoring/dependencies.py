from fastapi import Depends
from openai import AsyncOpenAI, OpenAI

from src.agent.client import AgentClient
from src.agent.dependencies import get_agent_client
from src.config import Settings, get_settings
from src.llm_providers.client import (
    get_async_prompt_openai_client,
    get_prompt_openai_client,
    get_research_openai_client,
)
from src.scoring.service import AgentScoringService, ScoringService


def get_scoring_service(
    settings: Settings = Depends(get_settings),
    research_client: OpenAI = Depends(get_research_openai_client),
    prompt_client: OpenAI = Depends(get_prompt_openai_client),
) -> ScoringService:
    return ScoringService(
        research_client=research_client,
        prompt_client=prompt_client,
        research_model=settings.RESEARCH_MODEL,
        prompt_model=settings.PROMPT_MODEL,
        prompt_count=settings.GENERATED_PROMPT_COUNT,
        max_competitors=settings.MAX_COMPETITORS,
    )


def get_agent_scoring_service(
    settings: Settings = Depends(get_settings),
    agent_client: AgentClient = Depends(get_agent_client),
) -> AgentScoringService:
    return AgentScoringService(
        agent_client=agent_client,
        prompt_client=None,
        prompt_model=settings.PROMPT_MODEL,
        max_competitors=settings.MAX_AGGREGATE_COMPETITORS,
    )


def get_classifying_agent_scoring_service(
    settings: Settings = Depends(get_settings),
    agent_client: AgentClient = Depends(get_agent_client),
    prompt_client: AsyncOpenAI = Depends(get_async_prompt_openai_client),
) -> AgentScoringService:
    return AgentScoringService(
        agent_client=agent_client,
        prompt_client=prompt_client,
        prompt_model=settings.PROMPT_MODEL,
        max_competitors=settings.MAX_AGGREGATE_COMPETITORS,
    )
