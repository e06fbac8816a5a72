"""Scoped registration of a dispatcher on a tool-call source.

Entering the scope attaches the dispatcher to the session, leaving it detaches the
dispatcher and waits for the batches that are still being processed. A replaced or torn
down session therefore never keeps a stale handler around.
"""

from __future__ import annotations

import asyncio
from types import TracebackType
from typing import TYPE_CHECKING, Sequence, Set

from ..logger import get_logger
from ..models import DispatchReport, ToolCallRequest

if TYPE_CHECKING:
    from .adapter import ToolCallSource
    from .dispatcher import ToolCallDispatcher

logger = get_logger(__name__)


class ToolCallSubscription:
    """
    Binds a ``ToolCallDispatcher`` to a ``ToolCallSource`` for the lifetime of an ``async with`` block.
    """

    def __init__(self, source: ToolCallSource, dispatcher: ToolCallDispatcher) -> None:
        self.source = source
        self.dispatcher = dispatcher
        self.active = False
        self._in_flight: Set[asyncio.Task[DispatchReport]] = set()

    async def _on_tool_call(self, requests: Sequence[ToolCallRequest]) -> DispatchReport:
        task = asyncio.current_task()
        if task is not None:
            self._in_flight.add(task)  # type: ignore[arg-type]
        try:
            return await self.dispatcher.handle_batch(requests, self.source)
        finally:
            if task is not None:
                self._in_flight.discard(task)  # type: ignore[arg-type]

    async def __aenter__(self) -> "ToolCallSubscription":
        self.source.on_tool_call(self._on_tool_call)
        self.active = True
        logger.debug("Tool-call handler attached to %r.", self.source)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            logger.debug("Tool-call subscription exiting with exception: %s.", exc_type)
        self.source.off_tool_call(self._on_tool_call)
        self.active = False
        logger.debug("Tool-call handler detached from %r.", self.source)

        pending = [task for task in self._in_flight if task is not asyncio.current_task()]
        if pending:
            logger.debug("Waiting for %d in-flight batch(es).", len(pending))
            await asyncio.gather(*pending, return_exceptions=True)

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)
