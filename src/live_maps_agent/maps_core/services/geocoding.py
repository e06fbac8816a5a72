"""Client for the address-to-coordinates geocoding service."""

from typing import Any, Dict

import httpx

from ..exceptions import GeocodingError
from ..logger import get_logger
from ..models import Coordinates

logger = get_logger(__name__)

GEOCODING_API_URL = "https://maps.googleapis.com/maps/api/geocode/json"


class GeocodingClient:
    """Resolves free-form addresses with the Geocoding JSON API.

    The HTTP client is owned by the caller; timeouts are configured on it.
    """

    def __init__(self, http: httpx.AsyncClient, api_key: str, base_url: str = GEOCODING_API_URL):
        self.http = http
        self.api_key = api_key
        self.base_url = base_url

    async def geocode(self, address: str) -> Coordinates:
        """Resolve ``address`` to the coordinates of the first match.

        Raises:
            GeocodingError: On transport errors, a non-``OK`` status, no results, or a malformed reply.
        """
        logger.debug("Geocoding address %r.", address)
        try:
            response = await self.http.get(self.base_url, params={"address": address, "key": self.api_key})
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise GeocodingError(f"Geocoding request failed: {exc}") from exc
        except ValueError as exc:
            raise GeocodingError(f"Geocoding reply is not valid JSON: {exc}") from exc

        return self._first_location(data)

    @staticmethod
    def _first_location(data: Dict[str, Any]) -> Coordinates:
        if not isinstance(data, dict):
            raise GeocodingError("Geocoding reply is not a JSON object.")

        status = data.get("status")
        results = data.get("results")
        if status != "OK" or not results:
            raise GeocodingError(
                f"Geocoding failed with status {status!r}.",
                status=status,
                detail=data.get("error_message"),
            )

        try:
            location = results[0]["geometry"]["location"]
            return Coordinates(latitude=location["lat"], longitude=location["lng"])
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise GeocodingError(f"Geocoding result has no usable location: {exc}", status=status) from exc
