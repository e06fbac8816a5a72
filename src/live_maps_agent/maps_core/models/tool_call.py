"""Data models for tool-call batches exchanged with the agent session."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .maps import MultimediaPayload

CallStatus = Literal["succeeded", "failed", "malformed", "ignored"]


class ToolCallRequest(BaseModel):
    """One call of an incoming batch.

    Attributes:
        id: Opaque identifier, unique within the batch, echoed by the response.
        name: Name of the requested capability.
        args: Arguments for the capability; their shape depends on ``name``.
    """

    id: str
    name: str
    args: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("args", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class ToolCallResponse(BaseModel):
    """Answer to one call, correlated by ``id``."""

    id: str
    name: str
    output: Dict[str, Any]


class CallOutcome(BaseModel):
    """What happened to a single call of a batch."""

    id: str
    name: str
    status: CallStatus
    error: Optional[str] = None


class DispatchReport(BaseModel):
    """Summary of one processed batch.

    Attributes:
        outcomes: One entry per incoming call, in request order.
        responses: The response batch that was sent (empty if nothing was sent).
        media_urls: Map URLs selected for a multimedia follow-up.
        media: Payloads that were actually pushed to the session.
    """

    outcomes: List[CallOutcome] = Field(default_factory=list)
    responses: List[ToolCallResponse] = Field(default_factory=list)
    media_urls: List[str] = Field(default_factory=list)
    media: List[MultimediaPayload] = Field(default_factory=list)

    def outcome(self, call_id: str) -> CallOutcome:
        """Return the outcome recorded for ``call_id``."""
        for outcome in self.outcomes:
            if outcome.id == call_id:
                return outcome
        raise KeyError(call_id)


class ToolResult(BaseModel):
    """Value returned by a tool implementation.

    Attributes:
        output: Payload of the correlated response.
        media_url: Source of a multimedia follow-up, if the tool produces one.
    """

    output: Dict[str, Any]
    media_url: Optional[str] = None
