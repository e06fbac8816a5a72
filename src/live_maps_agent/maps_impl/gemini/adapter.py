"""Translate Gemini Live messages into the package's tool-call protocol and back."""

import asyncio
from typing import Any, Callable, List, Optional, Sequence, Set

from google.genai import types

from live_maps_agent.maps_core import (
    MultimediaPayload,
    ToolCallRequest,
    ToolCallResponse,
    get_logger,
)
from live_maps_agent.maps_core.dispatch import ToolCallHandler

logger = get_logger(__name__)

TextListener = Callable[[str], None]


class GeminiLiveSession:
    """Adapter around a google-genai live ``AsyncSession``.

    Incoming tool-call messages are fanned out to the registered handlers, each batch in
    its own task, so a slow batch never blocks reading the next message.
    """

    def __init__(self, session: Any, on_text: Optional[TextListener] = None):
        """Initialize the adapter.

        Args:
            session: The live session returned by ``client.aio.live.connect``.
            on_text: Called with text the agent produces, if any.
        """
        self.session = session
        self.on_text = on_text
        self._handlers: List[ToolCallHandler] = []
        self._tasks: Set[asyncio.Task] = set()

    def on_tool_call(self, handler: ToolCallHandler) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def off_tool_call(self, handler: ToolCallHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    @staticmethod
    def get_tool_calls(tool_call: types.LiveServerToolCall) -> List[ToolCallRequest]:
        """Extract the calls of one tool-call message.

        Args:
            tool_call: The ``tool_call`` field of a server message.

        Returns:
            The calls in the order the agent issued them.
        """
        return [
            ToolCallRequest(id=call.id or "", name=call.name or "", args=call.args)
            for call in (tool_call.function_calls or [])
        ]

    @staticmethod
    def build_tool_response_message(response: ToolCallResponse) -> types.FunctionResponse:
        return types.FunctionResponse(id=response.id, name=response.name, response={"output": response.output})

    @staticmethod
    def build_media_content(payload: MultimediaPayload) -> types.Content:
        """Wrap an image in a user turn holding one inline-data part."""
        blob = types.Blob(mime_type=payload.mime_type, data=payload.raw())
        return types.Content(role="user", parts=[types.Part(inline_data=blob)])

    async def send_tool_response(self, responses: Sequence[ToolCallResponse]) -> None:
        await self.session.send_tool_response(
            function_responses=[self.build_tool_response_message(response) for response in responses]
        )

    async def send_media(self, payload: MultimediaPayload) -> None:
        await self.session.send_client_content(turns=self.build_media_content(payload), turn_complete=True)

    async def send_text(self, text: str) -> None:
        await self.session.send_client_content(
            turns=types.Content(role="user", parts=[types.Part(text=text)]), turn_complete=True
        )

    def dispatch(self, message: types.LiveServerMessage) -> int:
        """Route one server message.

        Returns:
            The number of handler tasks started for it.
        """
        if message.tool_call_cancellation and message.tool_call_cancellation.ids:
            # calls already issued run to completion
            logger.info("Agent cancelled tool call(s) %s.", message.tool_call_cancellation.ids)

        if message.server_content and self.on_text:
            text = self._text_of(message.server_content)
            if text:
                self.on_text(text)

        if not message.tool_call:
            return 0

        requests = self.get_tool_calls(message.tool_call)
        if not requests:
            return 0

        logger.debug("Received %d tool call(s) for %d handler(s).", len(requests), len(self._handlers))
        for handler in list(self._handlers):
            task = asyncio.ensure_future(handler(requests))
            self._tasks.add(task)
            task.add_done_callback(self._task_done)
        return len(self._handlers)

    async def pump(self) -> None:
        """Read server messages until the session stops delivering them."""
        while True:
            received = 0
            async for message in self.session.receive():
                received += 1
                self.dispatch(message)
            if not received:
                logger.info("Live session closed.")
                return

    async def wait_idle(self) -> None:
        """Wait until every started batch has been processed."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Tool-call batch failed: %s", exc, exc_info=exc)

    @staticmethod
    def _text_of(content: types.LiveServerContent) -> str:
        if not content.model_turn or not content.model_turn.parts:
            return ""
        return "".join(part.text for part in content.model_turn.parts if part.text)
