"""Process configuration, read once at startup."""

import os
from pathlib import Path
from typing import Literal, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigurationError
from .logger import get_logger
from .services import GEOCODING_API_URL, STATIC_MAP_API_URL

logger = get_logger(__name__)

MediaPolicy = Literal["last", "each"]

DEFAULT_MODEL = "models/gemini-2.0-flash-exp"


class Settings(BaseModel):
    """
    Runtime settings of the live maps agent.

    Attributes:
        maps_api_key: Credential for the geocoding and static map services. Required.
        gemini_api_key: Credential for the live agent session; the SDK's own lookup is used when None.
        model: Live model name.
        response_modality: Modality the agent answers in (``AUDIO`` or ``TEXT``).
        http_timeout: Timeout in seconds for calls to the map services.
        geocoding_url: Endpoint of the geocoding service.
        static_map_url: Endpoint of the static map service.
        media_policy: ``last`` sends only the last map of a batch, ``each`` sends one per ``get_map`` call.
    """

    model_config = ConfigDict(frozen=True)

    maps_api_key: str = Field(min_length=1)
    gemini_api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    response_modality: Literal["AUDIO", "TEXT"] = "AUDIO"
    http_timeout: float = Field(default=30.0, gt=0)
    geocoding_url: str = GEOCODING_API_URL
    static_map_url: str = STATIC_MAP_API_URL
    media_policy: MediaPolicy = "last"

    @field_validator("maps_api_key")
    @classmethod
    def _strip_key(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @classmethod
    def from_env(cls, env_file: Optional[str | Path] = None) -> "Settings":
        """Load settings from the environment, after reading a ``.env`` file if one is found.

        Raises:
            ConfigurationError: If the maps credential is missing or a value is invalid.
        """
        dotenv_path = env_file or find_dotenv(usecwd=True)
        if dotenv_path:
            logger.debug("Loading environment from %s.", dotenv_path)
            load_dotenv(dotenv_path)

        maps_api_key = os.getenv("GOOGLE_MAPS_API_KEY") or os.getenv("MAPS_API_KEY")
        if not maps_api_key:
            raise ConfigurationError("Set GOOGLE_MAPS_API_KEY in the environment or in a .env file.")

        values = {
            "maps_api_key": maps_api_key,
            "gemini_api_key": os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY"),
            "model": os.getenv("LIVE_MAPS_MODEL"),
            "response_modality": (os.getenv("LIVE_MAPS_RESPONSE_MODALITY") or "").upper() or None,
            "http_timeout": os.getenv("LIVE_MAPS_HTTP_TIMEOUT"),
            "media_policy": os.getenv("LIVE_MAPS_MEDIA_POLICY"),
        }
        try:
            return cls(**{key: value for key, value in values.items() if value is not None})
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}") from exc
