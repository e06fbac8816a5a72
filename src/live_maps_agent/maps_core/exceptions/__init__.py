"""Export the exception hierarchy shared by configuration, tools, dispatch and services."""

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

__all__ = [
    "MapsAgentError",
    "ConfigurationError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolValidationError",
    "MalformedToolCallError",
    "UpstreamServiceError",
    "GeocodingError",
    "StaticMapError",
]
