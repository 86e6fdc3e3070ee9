from datetime import datetime, timezone
from enum import Enum
from typing import Any
from pydantic import BaseModel, Field


SUCCESS_STATUSES = frozenset({"completed", "finished"})
FAILURE_STATUSES = frozenset({"failed", "error", "expired"})
CREATED_STATUSES = frozenset({"created", "creating", "pending"})

ASSISTANT_MESSAGE_TYPE = "assistant_message"
NO_ANSWER_FOUND = "No answer found"


class AgentStatus(str, Enum):
    CREATED = "CREATED"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    # Client side only, carried by AgentTimeoutError
    TIMED_OUT = "TIMED_OUT"

    @classmethod
    def from_upstream(cls, raw_status: str | None) -> "AgentStatus":
        normalized = (raw_status or "").strip().lower()
        if normalized in SUCCESS_STATUSES:
            return cls.COMPLETED
        if normalized in FAILURE_STATUSES:
            return cls.FAILED
        if normalized in CREATED_STATUSES:
            return cls.CREATED
        return cls.RUNNING

    @property
    def is_terminal(self) -> bool:
        return self in (AgentStatus.COMPLETED, AgentStatus.FAILED, AgentStatus.TIMED_OUT)


class TaskHandle(BaseModel):
    id: str
    status: AgentStatus
    raw_status: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class StatusSnapshot(BaseModel):
    id: str
    status: AgentStatus
    raw_status: str | None = None
    error: str | None = None

    @classmethod
    def from_payload(cls, agent_id: str, payload: Any) -> "StatusSnapshot":
        if not isinstance(payload, dict):
            raise ValueError("Status response is not a JSON object")

        raw_status = payload.get("status")
        if raw_status is not None and not isinstance(raw_status, str):
            raise ValueError(f"Unexpected status value: {raw_status!r}")

        error = payload.get("error")
        if error is not None and not isinstance(error, str):
            error = str(error)
        return cls(
            id=str(payload.get("id") or agent_id),
            status=AgentStatus.from_upstream(raw_status),
            raw_status=raw_status,
            error=error,
        )


class ConversationMessage(BaseModel):
    id: str | None = None
    type: str
    text: str | None = None


class Conversation(BaseModel):
    id: str | None = None
    messages: list[ConversationMessage] = []

    def last_assistant_text(self) -> str | None:
        for message in reversed(self.messages):
            if message.type == ASSISTANT_MESSAGE_TYPE and message.text:
                return message.text
        return None


class AgentResult(BaseModel):
    id: str
    status: AgentStatus
    answer: str


class CreateAgentRequest(BaseModel):
    prompt: str = Field(min_length=1)


class CreateAgentResponse(BaseModel):
    agent_id: str
    status: AgentStatus


class PollAgentRequest(BaseModel):
    agent_id: str = Field(min_length=1)


class PollAgentResponse(BaseModel):
    agent_id: str
    status: AgentStatus
    answer: str
