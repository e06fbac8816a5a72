"""The two map capabilities declared to the agent."""

from typing import Annotated

from pydantic import Field

from .logger import get_logger
from .models import MapRenderRequest, ToolResult
from .services import GeocodingClient, StaticMapClient
from .tools import ToolRegistry

logger = get_logger(__name__)


class MapsToolset:
    """
    Implements ``geocode`` and ``get_map`` on top of the service clients.

    The method signatures double as the declarations sent to the agent: docstrings become
    tool descriptions and the ``Field`` metadata becomes the argument schema.
    """

    def __init__(self, geocoder: GeocodingClient, static_maps: StaticMapClient) -> None:
        self.geocoder = geocoder
        self.static_maps = static_maps

    def register_into(self, registry: ToolRegistry) -> ToolRegistry:
        registry.register(self.geocode)
        registry.register(self.get_map)
        return registry

    async def geocode(
        self,
        address: Annotated[str, Field(description="The address to geocode.")],
    ) -> ToolResult:
        """Geocodes an address string and returns the latitude and longitude."""
        coordinates = await self.geocoder.geocode(address)
        logger.debug("Resolved %r to %s.", address, coordinates)
        return ToolResult(output=coordinates.model_dump())

    async def get_map(
        self,
        lat: Annotated[float, Field(description="Latitude.")],
        lon: Annotated[float, Field(description="Longitude.")],
        maptype: Annotated[str, Field(description="One of `roadmap`, `satellite`, `hybrid`, `terrain`.")] = "roadmap",
        zoom: Annotated[int, Field(description="Zoom level.")] = 15,
        width: Annotated[int, Field(description="Image width in pixels.", ge=1)] = 600,
        height: Annotated[int, Field(description="Image height in pixels.", ge=1)] = 400,
        scale: Annotated[int, Field(description="Map scale (pixel density).", ge=1)] = 1,
    ) -> ToolResult:
        """Returns a success message right away and then sends the map image as a separate message."""
        request = MapRenderRequest(lat=lat, lon=lon, maptype=maptype, zoom=zoom, width=width, height=height, scale=scale)
        url = self.static_maps.build_url(request)
        return ToolResult(output={"success": True}, media_url=url)
