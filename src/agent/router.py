from fastapi import APIRouter, Depends, status

from src.agent.client import AgentClient
from src.agent.dependencies import get_agent_client
from src.agent.schemas import (
    CreateAgentRequest,
    CreateAgentResponse,
    PollAgentRequest,
    PollAgentResponse,
)
from src.common.exceptions import upstream_error_response, upstream_timeout_response


router = APIRouter(
    prefix="/agents",
    tags=["Agents"],
)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={**upstream_error_response},
)
async def create_agent(
    agent_input: CreateAgentRequest,
    agent_client: AgentClient = Depends(get_agent_client),
) -> CreateAgentResponse:
    handle = await agent_client.submit(agent_input.prompt)
    return CreateAgentResponse(agent_id=handle.id, status=handle.status)


@router.post(
    "/poll",
    responses={**upstream_error_response, **upstream_timeout_response},
)
async def poll_agent(
    poll_input: PollAgentRequest,
    agent_client: AgentClient = Depends(get_agent_client),
) -> PollAgentResponse:
    result = await agent_client.wait_for_result(poll_input.agent_id)
    return PollAgentResponse(
        agent_id=result.id, status=result.status, answer=result.answer
    )
