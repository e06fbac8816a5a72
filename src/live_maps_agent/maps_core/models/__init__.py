"""Data models for tool calls, dispatch reports and map rendering."""

from .maps import Coordinates, MapRenderRequest, MultimediaPayload
from .tool_call import ToolCallRequest, ToolCallResponse, ToolResult, CallOutcome, CallStatus, DispatchReport

__all__ = [
    "Coordinates",
    "MapRenderRequest",
    "MultimediaPayload",
    "ToolCallRequest",
    "ToolCallResponse",
    "ToolResult",
    "CallOutcome",
    "CallStatus",
    "DispatchReport",
]
