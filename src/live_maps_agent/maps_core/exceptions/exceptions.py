"""
Exception hierarchy for the live maps agent.

Covers configuration problems, tool declaration problems, malformed tool calls
coming from the agent, and failures of the external map services.
"""

from typing import Optional


class MapsAgentError(Exception):
    """Base exception for all errors raised by this package."""

    pass


class ConfigurationError(MapsAgentError):
    """Raised when required process configuration is missing or invalid."""

    pass


class ToolRegistrationError(MapsAgentError):
    """Raised when a tool cannot be registered."""

    pass


class ToolNotFoundError(MapsAgentError):
    """Raised when a requested tool is not in the registry."""

    pass


class ToolValidationError(MapsAgentError):
    """Raised when a tool definition is invalid."""

    pass


class MalformedToolCallError(MapsAgentError):
    """Raised when the arguments of a tool call do not match the tool's declaration."""

    def __init__(self, tool_name: str, detail: str):
        self.tool_name = tool_name
        self.detail = detail
        super().__init__(f"Malformed call to '{tool_name}': {detail}")


class UpstreamServiceError(MapsAgentError):
    """Raised when an external map service fails or answers with an unusable payload."""

    service = "upstream"

    def __init__(self, message: str, status: Optional[str] = None, detail: Optional[str] = None):
        self.status = status
        self.detail = detail
        super().__init__(message)


class GeocodingError(UpstreamServiceError):
    """Raised when an address cannot be resolved to coordinates."""

    service = "geocoding"


class StaticMapError(UpstreamServiceError):
    """Raised when a static map image cannot be fetched."""

    service = "static_map"
