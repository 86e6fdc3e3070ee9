from typing import AsyncGenerator
from fastapi import Depends

from src.agent.client import AgentClient
from src.config import Settings, get_settings


async def get_agent_client(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[AgentClient, None]:
    async with AgentClient(
        api_key=settings.CURSOR_API_KEY,
        base_url=settings.AGENT_API_BASE_URL,
        source_repository=settings.AGENT_SOURCE_REPOSITORY,
        source_ref=settings.AGENT_SOURCE_REF,
        user_agent=settings.USER_AGENT,
        poll_interval=settings.AGENT_POLL_INTERVAL,
        max_wait=settings.AGENT_MAX_WAIT,
        poll_error_retries=settings.AGENT_POLL_ERROR_RETRIES,
    ) as client:
        yield client
