import asyncio
import logging
import time
from datetime import datetime
from types import TracebackType
from typing import Any, Type
from aiohttp import ClientError, ClientSession
from pydantic import ValidationError

from src.agent.exceptions import (
    AgentFailedError,
    AgentRequestError,
    AgentResponseFormatError,
    AgentTimeoutError,
    SubmissionError,
)
from src.agent.polling import Clock, PollPolicy, PollTimeout, Sleep, poll_until
from src.agent.schemas import (
    NO_ANSWER_FOUND,
    AgentResult,
    AgentStatus,
    Conversation,
    StatusSnapshot,
    TaskHandle,
)
from src.common.exceptions import KnownException


logger = logging.getLogger(__name__)


def is_transient_request_error(e: Exception) -> bool:
    if not isinstance(e, AgentRequestError) or isinstance(
        e, AgentResponseFormatError
    ):
        return False
    return e.status is None or e.status == 429 or e.status >= 500


class AgentClient:
    """Client for a remote background agent service.

    An agent is created from a prompt, polled until it reaches a terminal
    status and then its conversation is fetched to read the answer.
    """

    def __init__(
        self,
        *,
        api_key: str | None,
        base_url: str,
        source_repository: str,
        source_ref: str,
        user_agent: str,
        poll_interval: float = 3.0,
        max_wait: float = 300.0,
        poll_error_retries: int = 2,
        clock: Clock = time.monotonic,
        sleep: Sleep = asyncio.sleep,
    ):
        if not api_key:
            raise KnownException(
                "CURSOR_API_KEY is required to access the background agent API"
            )

        self.base_url = base_url.rstrip("/")
        self.source_repository = source_repository
        self.source_ref = source_ref
        self.poll_interval = poll_interval
        self.max_wait = max_wait
        self.poll_error_retries = poll_error_retries
        self.clock = clock
        self.sleep = sleep
        self.session: ClientSession = ClientSession(
            headers={
                "Accept": "application/json",
                "User-Agent": user_agent,
                "Authorization": f"Bearer {api_key}",
            }
        )

    async def __aenter__(self):
        return self

    async def __aexit__(
        self, exc_type: Type[Exception], exc: Exception, tb: TracebackType
    ):
        if self.session:
            await self.session.close()

    async def _get_json(self, path: str, action: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with self.session.request("GET", url) as response:
                if not 200 <= response.status < 300:
                    raise AgentRequestError(
                        response.status, f"Failed to {action}: {response.status}"
                    )
                return await response.json()
        except ClientError as e:
            raise AgentRequestError(None, f"Failed to {action}: {e}") from e

    async def submit(self, instruction: str) -> TaskHandle:
        logger.info(f"Creating background agent with prompt: {instruction[:80]}")

        payload = {
            "prompt": {"text": instruction},
            "source": {
                "repository": self.source_repository,
                "ref": self.source_ref,
            },
        }
        try:
            async with self.session.request(
                "POST", f"{self.base_url}/agents", json=payload
            ) as response:
                if not 200 <= response.status < 300:
                    error_text = await response.text()
                    raise SubmissionError(response.status, error_text)
                data: Any = await response.json()
        except ClientError as e:
            raise SubmissionError(None, str(e)) from e

        if not isinstance(data, dict):
            raise SubmissionError(None, "Response is not a JSON object")

        agent_id = data.get("id")
        if not agent_id:
            raise SubmissionError(None, "Response did not include an agent id")

        raw_status = data.get("status")
        if raw_status is not None and not isinstance(raw_status, str):
            raise SubmissionError(None, f"Unexpected status value: {raw_status!r}")
        handle = TaskHandle(
            id=str(agent_id),
            status=AgentStatus.from_upstream(raw_status),
            raw_status=raw_status,
        )
        if created_at := data.get("createdAt"):
            try:
                handle.created_at = datetime.fromisoformat(created_at)
            except (TypeError, ValueError):
                logger.debug(f"Ignoring unparsable createdAt: {created_at}")

        logger.info(f"Agent created - ID: {handle.id}, Status: {raw_status}")
        return handle

    async def get_status(self, agent_id: str) -> StatusSnapshot:
        data = await self._get_json(f"/agents/{agent_id}", "poll agent")
        try:
            snapshot = StatusSnapshot.from_payload(agent_id, data)
        except ValueError as e:
            raise AgentResponseFormatError(
                f"Unexpected status format for agent '{agent_id}': {e}"
            ) from e
        logger.info(f"Agent {agent_id} status: {snapshot.raw_status}")
        return snapshot

    async def get_conversation(self, agent_id: str) -> Conversation:
        data = await self._get_json(
            f"/agents/{agent_id}/conversation", "fetch conversation"
        )
        try:
            return Conversation.model_validate(data)
        except ValidationError as e:
            raise AgentResponseFormatError(
                f"Unexpected conversation format for agent '{agent_id}'"
            ) from e

    async def wait_for_result(
        self, handle: TaskHandle | str, max_wait: float | None = None
    ) -> AgentResult:
        agent_id = handle.id if isinstance(handle, TaskHandle) else handle
        max_wait = self.max_wait if max_wait is None else max_wait

        policy: PollPolicy[StatusSnapshot] = PollPolicy(
            interval=self.poll_interval,
            max_wait=max_wait,
            is_success=lambda s: s.status == AgentStatus.COMPLETED,
            is_failure=lambda s: s.status == AgentStatus.FAILED,
            max_transient_errors=self.poll_error_retries,
            is_transient=is_transient_request_error,
        )

        logger.info(f"Starting to poll agent: {agent_id}")
        try:
            outcome = await poll_until(
                lambda: self.get_status(agent_id),
                policy,
                clock=self.clock,
                sleep=self.sleep,
            )
        except PollTimeout as e:
            logger.warning(
                f"Agent {agent_id} timed out after {e.polls} polls ({e.elapsed:g}s)"
            )
            raise AgentTimeoutError(agent_id, max_wait) from e

        snapshot = outcome.result
        if snapshot.status == AgentStatus.FAILED:
            logger.error(f"Agent {agent_id} failed: {snapshot.error}")
            raise AgentFailedError(agent_id, snapshot.error)

        logger.info(f"Agent {agent_id} completed, fetching conversation")
        conversation = await self.get_conversation(agent_id)
        answer = conversation.last_assistant_text()
        if answer is None:
            logger.warning(f"Agent {agent_id} finished without an assistant message")
            answer = NO_ANSWER_FOUND

        return AgentResult(id=snapshot.id, status=snapshot.status, answer=answer)

    async def await_completion(
        self, handle: TaskHandle | str, max_wait: float | None = None
    ) -> str:
        result = await self.wait_for_result(handle, max_wait)
        return result.answer

    async def run(self, instruction: str, max_wait: float | None = None) -> str:
        handle = await self.submit(instruction)
        return await self.await_completion(handle, max_wait)
