"""Clients for the external geolocation services."""

from .geocoding import GeocodingClient, GEOCODING_API_URL
from .static_map import StaticMapClient, STATIC_MAP_API_URL, redact_key

__all__ = ["GeocodingClient", "GEOCODING_API_URL", "StaticMapClient", "STATIC_MAP_API_URL", "redact_key"]
