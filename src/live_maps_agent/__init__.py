"""Live Maps Agent - answers a live voice agent's geocoding and map tool calls."""

from .maps_core import (
    Settings,
    MapsAgentError,
    ConfigurationError,
    MalformedToolCallError,
    UpstreamServiceError,
    GeocodingError,
    StaticMapError,
    ToolCallRequest,
    ToolCallResponse,
    MultimediaPayload,
    MapRenderRequest,
    DispatchReport,
    MapsToolset,
    MapDisplayState,
    ToolCallDispatcher,
    ToolCallSubscription,
    setup_logging,
)
from .maps_impl.gemini import LiveMapsAgent, GeminiToolRegistry, GeminiLiveSession, build_live_config

__all__ = [
    "Settings",
    "MapsAgentError",
    "ConfigurationError",
    "MalformedToolCallError",
    "UpstreamServiceError",
    "GeocodingError",
    "StaticMapError",
    "ToolCallRequest",
    "ToolCallResponse",
    "MultimediaPayload",
    "MapRenderRequest",
    "DispatchReport",
    "MapsToolset",
    "MapDisplayState",
    "ToolCallDispatcher",
    "ToolCallSubscription",
    "setup_logging",
    "LiveMapsAgent",
    "GeminiToolRegistry",
    "GeminiLiveSession",
    "build_live_config",
]
