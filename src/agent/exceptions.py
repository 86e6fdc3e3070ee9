from src.agent.schemas import AgentStatus
from src.common.exceptions import UpstreamException, UpstreamTimeoutException


class AgentException(UpstreamException):
    pass


class SubmissionError(AgentException):
    def __init__(self, status: int | None, detail: str):
        self.status = status
        self.detail = detail
        if status is None:
            super().__init__(f"Failed to create agent: {detail}")
        else:
            super().__init__(f"Failed to create agent: {status} {detail}")


class AgentFailedError(AgentException):
    def __init__(self, agent_id: str, detail: str | None = None):
        self.agent_id = agent_id
        self.detail = detail or "Unknown error"
        super().__init__(f"Agent failed: {self.detail}")


class AgentRequestError(AgentException):
    """A status or conversation request failed in a way that is not retried."""

    def __init__(self, status: int | None, detail: str):
        self.status = status
        self.detail = detail
        super().__init__(detail)


class AgentResponseFormatError(AgentRequestError):
    """The agent API answered 2xx with a body that does not have the expected shape."""

    def __init__(self, detail: str):
        super().__init__(None, detail)


class AgentTimeoutError(UpstreamTimeoutException, TimeoutError):
    def __init__(self, agent_id: str, max_wait: float):
        self.agent_id = agent_id
        self.max_wait = max_wait
        self.status = AgentStatus.TIMED_OUT
        super().__init__(
            f"Agent '{agent_id}' did not finish within {max_wait:g} seconds"
        )
