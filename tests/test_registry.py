from typing import Annotated, Any, List

import pytest
from google.genai import types
from pydantic import BaseModel, Field

from live_maps_agent.maps_core import (
    MalformedToolCallError,
    ToolNotFoundError,
    ToolRegistrationError,
    ToolRegistry,
    ToolValidationError,
)
from live_maps_agent.maps_impl.gemini import GeminiToolRegistry


# Renamed to avoid PytestCollectionWarning
class ConcreteTestRegistry(ToolRegistry):
    @property
    def tool_object(self) -> Any:
        return None


def test_registry_tool_decorator() -> None:
    registry = ConcreteTestRegistry()

    @registry.tool
    def zoom_in(level: Annotated[int, Field(description="Current zoom level")]) -> int:
        """Returns the next zoom level."""
        return level + 1

    assert "zoom_in" in registry.tools
    tool_def = registry.tools["zoom_in"]
    assert tool_def.description == "Returns the next zoom level."
    assert tool_def.func(14) == 15
    assert tool_def.parameters == {
        "type": "object",
        "properties": {"level": {"type": "integer", "description": "Current zoom level"}},
        "required": ["level"],
    }


def test_registry_missing_docstring() -> None:
    registry = ConcreteTestRegistry()
    with pytest.raises(ToolValidationError, match="missing docstring"):

        @registry.tool
        def no_doc_tool(x: Annotated[int, Field(description="desc")]) -> None:
            pass


def test_registry_missing_param_description() -> None:
    registry = ConcreteTestRegistry()
    with pytest.raises(ToolValidationError, match="missing a description"):

        @registry.tool
        def bad_param_tool(x: int) -> None:
            """Docstring."""
            pass


def test_registry_rejects_duplicates_and_unknown_unregister() -> None:
    registry = ConcreteTestRegistry()

    def ping(host: Annotated[str, Field(description="Host")]) -> str:
        """Ping a host."""
        return host

    registry.register(ping)
    with pytest.raises(ToolRegistrationError, match="already registered"):
        registry.register(ping)

    registry.unregister("ping")
    assert registry.tools == {}
    with pytest.raises(ToolNotFoundError):
        registry.unregister("ping")


def test_nested_models_are_resolved_without_refs() -> None:
    registry = ConcreteTestRegistry()

    class Waypoint(BaseModel):
        lat: float = Field(description="Latitude")
        lon: float = Field(description="Longitude")

    class Route(BaseModel):
        name: str = Field(description="Route name")
        points: List[Waypoint] = Field(description="Waypoints")

    @registry.tool
    def draw_route(route: Annotated[Route, Field(description="The route to draw")]) -> str:
        """Draws a route."""
        return route.name

    schema = registry.tools["draw_route"].parameters
    assert "$defs" not in schema
    route_schema = schema["properties"]["route"]
    assert route_schema["properties"]["points"]["items"]["properties"]["lat"]["type"] == "number"
    assert "title" not in route_schema


def test_validate_arguments_applies_defaults() -> None:
    registry = ConcreteTestRegistry()

    @registry.tool
    def frame(
        lat: Annotated[float, Field(description="Latitude")],
        zoom: Annotated[int, Field(description="Zoom")] = 15,
    ) -> None:
        """Frames a point."""

    assert registry.validate_arguments("frame", {"lat": "1.5"}) == {"lat": 1.5, "zoom": 15}
    with pytest.raises(MalformedToolCallError, match="lat"):
        registry.validate_arguments("frame", {"zoom": 3})
    with pytest.raises(ToolNotFoundError):
        registry.validate_arguments("missing", {})


def test_gemini_registry_declares_map_tools(make_dispatcher) -> None:
    registry = make_dispatcher()._registry
    assert isinstance(registry, GeminiToolRegistry)

    tool_obj = registry.tool_object
    assert isinstance(tool_obj, types.Tool)
    decls = {decl.name: decl for decl in tool_obj.function_declarations or []}
    assert set(decls) == {"geocode", "get_map"}

    geocode = decls["geocode"]
    assert geocode.description == "Geocodes an address string and returns the latitude and longitude."
    assert geocode.parameters is not None
    assert geocode.parameters.required == ["address"]

    get_map = decls["get_map"]
    assert get_map.parameters is not None
    assert sorted(get_map.parameters.required or []) == ["lat", "lon"]
    assert set((get_map.parameters.properties or {}).keys()) == {
        "lat",
        "lon",
        "maptype",
        "zoom",
        "width",
        "height",
        "scale",
    }
    assert get_map.parameters.properties["zoom"].default == 15


def test_gemini_registry_without_tools() -> None:
    assert GeminiToolRegistry().tool_object is None
