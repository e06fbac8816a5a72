"""Protocols the dispatcher uses to talk to an agent session."""

from __future__ import annotations

from typing import Awaitable, Callable, Protocol, Sequence

from ..models import MultimediaPayload, ToolCallRequest, ToolCallResponse

ToolCallHandler = Callable[[Sequence[ToolCallRequest]], Awaitable[object]]


class SessionAdapter(Protocol):
    """
    Outbound side of an agent session.
    """

    async def send_tool_response(self, responses: Sequence[ToolCallResponse]) -> None:
        """Sends one correlated response batch."""
        ...

    async def send_media(self, payload: MultimediaPayload) -> None:
        """Pushes an inline multimedia part into the agent's input stream."""
        ...


class ToolCallSource(SessionAdapter, Protocol):
    """
    A session that also delivers tool-call batches to registered handlers.
    """

    def on_tool_call(self, handler: ToolCallHandler) -> None:
        """Registers ``handler``; registering the same handler twice has no effect."""
        ...

    def off_tool_call(self, handler: ToolCallHandler) -> None:
        """Removes ``handler`` if it is registered."""
        ...
