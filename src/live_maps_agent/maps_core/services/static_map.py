"""Client for the static map image service."""

import httpx

from ..exceptions import StaticMapError
from ..logger import get_logger
from ..models import MapRenderRequest, MultimediaPayload

logger = get_logger(__name__)

STATIC_MAP_API_URL = "https://maps.googleapis.com/maps/api/staticmap"
DEFAULT_IMAGE_MIME_TYPE = "image/png"


def redact_key(url: str) -> str:
    """Return ``url`` with its ``key`` query parameter masked, for logging."""
    parsed = httpx.URL(url)
    if "key" not in parsed.params:
        return url
    return str(parsed.copy_set_param("key", "***"))


class StaticMapClient:
    """Builds static map URLs and downloads the rendered images."""

    def __init__(self, http: httpx.AsyncClient, api_key: str, base_url: str = STATIC_MAP_API_URL):
        self.http = http
        self.api_key = api_key
        self.base_url = base_url

    def build_url(self, request: MapRenderRequest) -> str:
        """Build the image URL for ``request``. Same request, same URL.

        Raises:
            StaticMapError: If the parameters do not form a valid URL.
        """
        params = [
            ("center", request.center),
            ("zoom", str(request.zoom)),
            ("size", request.size),
            ("maptype", request.maptype),
            ("scale", str(request.scale)),
            ("key", self.api_key),
        ]
        try:
            return str(httpx.URL(self.base_url, params=params))
        except httpx.InvalidURL as exc:
            raise StaticMapError(f"Cannot build map URL: {exc}") from exc

    async def fetch(self, url: str) -> MultimediaPayload:
        """Download the image behind ``url``.

        Raises:
            StaticMapError: On transport errors or a non-2xx reply.
        """
        logger.debug("Fetching map image %s.", redact_key(url))
        try:
            response = await self.http.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise StaticMapError(
                f"Map image request failed with HTTP {exc.response.status_code}.",
                status=str(exc.response.status_code),
                detail=exc.response.text[:200],
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise StaticMapError(f"Map image request failed: {exc}") from exc

        mime_type = response.headers.get("content-type", DEFAULT_IMAGE_MIME_TYPE).split(";")[0].strip()
        return MultimediaPayload.from_bytes(response.content, mime_type or DEFAULT_IMAGE_MIME_TYPE)
