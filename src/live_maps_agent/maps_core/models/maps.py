"""Domain models for geocoding results and static map rendering."""

import base64

from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    """A resolved point on the globe."""

    latitude: float
    longitude: float


class MapRenderRequest(BaseModel):
    """Parameters of one static map image.

    Built from a single ``get_map`` call and consumed right away to build the image URL.
    """

    lat: float
    lon: float
    maptype: str = "roadmap"
    zoom: int = 15
    width: int = Field(default=600, ge=1)
    height: int = Field(default=400, ge=1)
    scale: int = Field(default=1, ge=1)

    @property
    def center(self) -> str:
        return f"{self.lat},{self.lon}"

    @property
    def size(self) -> str:
        return f"{self.width}x{self.height}"


class MultimediaPayload(BaseModel):
    """Binary content pushed to the session outside the tool-response channel.

    Attributes:
        mime_type: Content type reported by the image service.
        data: The content as base64 text.
    """

    mime_type: str
    data: str

    @classmethod
    def from_bytes(cls, content: bytes, mime_type: str) -> "MultimediaPayload":
        return cls(mime_type=mime_type, data=base64.b64encode(content).decode("ascii"))

    def raw(self) -> bytes:
        """Decode the payload back into bytes."""
        return base64.b64decode(self.data)
