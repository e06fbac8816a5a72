"""Public exports for the core abstractions: models, tools, services and dispatch."""

from .config import Settings, MediaPolicy
from .exceptions import (
    MapsAgentError,
    ConfigurationError,
    ToolRegistrationError,
    ToolNotFoundError,
    ToolValidationError,
    MalformedToolCallError,
    UpstreamServiceError,
    GeocodingError,
    StaticMapError,
)
from .logger import get_logger, setup_logging
from .models import (
    Coordinates,
    MapRenderRequest,
    MultimediaPayload,
    ToolCallRequest,
    ToolCallResponse,
    ToolResult,
    CallOutcome,
    DispatchReport,
)
from .tools import ToolDefinition, ToolRegistry
from .services import GeocodingClient, StaticMapClient
from .toolset import MapsToolset
from .instructions import SYSTEM_INSTRUCTION
from .state import MapDisplayState
from .dispatch import SessionAdapter, ToolCallSource, ToolCallDispatcher, ToolCallSubscription

__all__ = [
    "Settings",
    "MediaPolicy",
    "MapsAgentError",
    "ConfigurationError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolValidationError",
    "MalformedToolCallError",
    "UpstreamServiceError",
    "GeocodingError",
    "StaticMapError",
    "get_logger",
    "setup_logging",
    "Coordinates",
    "MapRenderRequest",
    "MultimediaPayload",
    "ToolCallRequest",
    "ToolCallResponse",
    "ToolResult",
    "CallOutcome",
    "DispatchReport",
    "ToolDefinition",
    "ToolRegistry",
    "GeocodingClient",
    "StaticMapClient",
    "MapsToolset",
    "SYSTEM_INSTRUCTION",
    "MapDisplayState",
    "SessionAdapter",
    "ToolCallSource",
    "ToolCallDispatcher",
    "ToolCallSubscription",
]
