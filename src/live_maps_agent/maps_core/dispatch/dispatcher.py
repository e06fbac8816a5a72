"""Dispatch of tool-call batches to the map tools and correlation of their responses."""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .adapter import SessionAdapter
from ..config import MediaPolicy
from ..exceptions import MalformedToolCallError, StaticMapError, UpstreamServiceError
from ..logger import get_logger
from ..models import CallOutcome, DispatchReport, MultimediaPayload, ToolCallRequest, ToolCallResponse, ToolResult
from ..services import StaticMapClient, redact_key
from ..tools import ToolRegistry

logger = get_logger(__name__)


class ToolCallDispatcher:
    """Runs the calls of one batch and sends back a single correlated response batch.

    Every call of a batch is handled independently: an unknown tool is ignored, arguments
    that do not match the declaration make the call malformed, and any error raised while
    running the tool makes it failed. None of these produce a response entry and none of
    them affect sibling calls.

    Once all calls have resolved the responses go out in one send, in request order. Map
    images are fetched only after that send, so the agent always sees the acknowledgment
    of ``get_map`` before the image itself. An image that cannot be fetched is dropped.
    """

    # Expected failures of a single call, logged without a traceback.
    RECOVERABLE_ERRORS = (MalformedToolCallError, UpstreamServiceError)

    def __init__(
        self,
        *,
        registry: ToolRegistry,
        static_maps: StaticMapClient,
        media_policy: MediaPolicy = "last",
        on_map_url: Optional[Callable[[str], None]] = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            registry: Registry holding the declared tools and their argument models.
            static_maps: Client used to download map images for the multimedia follow-up.
            media_policy: ``last`` keeps only the last map of a batch, ``each`` sends every map.
            on_map_url: Called with each map URL selected for display.
        """
        if media_policy not in ("last", "each"):
            raise ValueError(f"Unexpected media policy: {media_policy}")
        self._registry = registry
        self._static_maps = static_maps
        self._media_policy = media_policy
        self._on_map_url = on_map_url

    async def handle_batch(self, requests: Sequence[ToolCallRequest], session: SessionAdapter) -> DispatchReport:
        """Process one batch of tool calls end to end.

        Args:
            requests: The calls delivered together in one agent turn.
            session: Where the response batch and the map images are sent.

        Returns:
            A report with the outcome of every call, the sent responses and the sent images.
        """
        report = DispatchReport()
        if not requests:
            logger.debug("Empty tool-call batch, nothing to do.")
            return report

        logger.info("Processing %d tool call(s).", len(requests))
        results = await asyncio.gather(*(self._handle_call(request) for request in requests))

        media_urls: List[str] = []
        for request, (outcome, result) in zip(requests, results):
            report.outcomes.append(outcome)
            if result is None:
                continue
            report.responses.append(ToolCallResponse(id=request.id, name=request.name, output=result.output))
            if result.media_url:
                media_urls.append(result.media_url)

        if report.responses:
            logger.debug("Sending %d tool response(s).", len(report.responses))
            await session.send_tool_response(report.responses)

        report.media_urls = self._select_media(media_urls)
        for url in report.media_urls:
            if self._on_map_url is not None:
                self._on_map_url(url)
            payload = await self._fetch_media(url)
            if payload is None:
                continue
            await session.send_media(payload)
            report.media.append(payload)

        return report

    async def _handle_call(self, request: ToolCallRequest) -> Tuple[CallOutcome, Optional[ToolResult]]:
        logger.debug("Handling tool call: %s (ID: %s)", request.name, request.id)

        if request.name not in self._registry.tools:
            logger.warning("Ignoring call to unknown tool '%s' (ID: %s).", request.name, request.id)
            return CallOutcome(id=request.id, name=request.name, status="ignored"), None

        tool_def = self._registry.tools[request.name]
        try:
            function_args = self._registry.validate_arguments(request.name, request.args)
            result = await self._execute_tool(tool_def.func, function_args)
        except MalformedToolCallError as exc:
            logger.warning("%s (ID: %s)", exc, request.id)
            return CallOutcome(id=request.id, name=request.name, status="malformed", error=str(exc)), None
        except self.RECOVERABLE_ERRORS as exc:
            detail = getattr(exc, "detail", None)
            logger.error(
                "Tool '%s' failed (ID: %s): %s%s", request.name, request.id, exc, f" ({detail})" if detail else ""
            )
            return CallOutcome(id=request.id, name=request.name, status="failed", error=str(exc)), None
        except Exception as exc:
            logger.exception("Unexpected error in tool '%s' (ID: %s)", request.name, request.id)
            return CallOutcome(id=request.id, name=request.name, status="failed", error=str(exc)), None

        return CallOutcome(id=request.id, name=request.name, status="succeeded"), result

    @staticmethod
    async def _execute_tool(tool_function: Any, function_args: Dict[str, Any]) -> ToolResult:
        if inspect.iscoroutinefunction(tool_function):
            result = await tool_function(**function_args)
        else:
            result = tool_function(**function_args)
        if not isinstance(result, ToolResult):
            result = ToolResult(output=result if isinstance(result, dict) else {"result": result})
        return result

    def _select_media(self, media_urls: List[str]) -> List[str]:
        if not media_urls:
            return []
        if self._media_policy == "each":
            return media_urls
        if len(media_urls) > 1:
            logger.info("Batch produced %d maps, only the last one is sent.", len(media_urls))
        return media_urls[-1:]

    async def _fetch_media(self, url: str) -> Optional[MultimediaPayload]:
        try:
            return await self._static_maps.fetch(url)
        except StaticMapError as exc:
            logger.error("Dropping map image %s: %s", redact_key(url), exc)
            return None
