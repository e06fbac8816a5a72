import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Sequence, Tuple

import httpx
import pytest
from dotenv import find_dotenv, load_dotenv

from live_maps_agent.maps_core import (
    GeocodingClient,
    MapsToolset,
    MultimediaPayload,
    StaticMapClient,
    ToolCallDispatcher,
    ToolCallResponse,
)
from live_maps_agent.maps_impl.gemini import GeminiToolRegistry

CASSETTE_DIR = str(Path(__file__).parent / "cassettes")

# Load a .env from the project root so recording tests can pick up real keys.
env_file = find_dotenv(usecwd=True)
if env_file:
    load_dotenv(env_file)

TEST_KEY = "test-key"
PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingSession:
    """Session double that records every send in order."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, Any]] = []

    async def send_tool_response(self, responses: Sequence[ToolCallResponse]) -> None:
        self.events.append(("tool_response", list(responses)))

    async def send_media(self, payload: MultimediaPayload) -> None:
        self.events.append(("media", payload))

    def of_kind(self, kind: str) -> List[Any]:
        return [value for event_kind, value in self.events if event_kind == kind]


def geocode_ok(lat: float, lng: float) -> Dict[str, Any]:
    return {"status": "OK", "results": [{"geometry": {"location": {"lat": lat, "lng": lng}}}]}


def maps_service(geocode_replies: Dict[str, Any], image_status: int = 200) -> Handler:
    """A fake of both map services.

    ``geocode_replies`` maps an address to a JSON reply, or to an exception to raise.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/geocode/json"):
            reply = geocode_replies.get(request.url.params["address"], {"status": "ZERO_RESULTS", "results": []})
            if isinstance(reply, Exception):
                raise reply
            return httpx.Response(200, json=reply)
        if request.url.path.endswith("/staticmap"):
            if image_status != 200:
                return httpx.Response(image_status, text="denied")
            return httpx.Response(200, content=PNG_BYTES, headers={"content-type": "image/png"})
        return httpx.Response(404)

    return handler


@pytest.fixture
def session() -> RecordingSession:
    return RecordingSession()


@pytest.fixture
def make_dispatcher() -> Callable[..., ToolCallDispatcher]:
    """Build a dispatcher wired to fake map services."""

    def factory(
        geocode_replies: Dict[str, Any] | None = None,
        image_status: int = 200,
        media_policy: str = "last",
        on_map_url: Callable[[str], None] | None = None,
    ) -> ToolCallDispatcher:
        http = httpx.AsyncClient(transport=httpx.MockTransport(maps_service(geocode_replies or {}, image_status)))
        static_maps = StaticMapClient(http, TEST_KEY)
        toolset = MapsToolset(GeocodingClient(http, TEST_KEY), static_maps)
        registry = toolset.register_into(GeminiToolRegistry())
        return ToolCallDispatcher(
            registry=registry,
            static_maps=static_maps,
            media_policy=media_policy,  # type: ignore[arg-type]
            on_map_url=on_map_url,
        )

    return factory


@pytest.fixture(scope="session")
def vcr_config() -> dict[str, Any]:
    return {
        "cassette_library_dir": CASSETTE_DIR,
        "record_mode": os.getenv("VCR_RECORD_MODE", "none"),
        "match_on": ["method", "path"],
        "filter_query_parameters": ["key"],
        "decode_compressed_response": True,
    }


@pytest.fixture(scope="module")
def vcr_cassette_dir() -> str:
    return CASSETTE_DIR
