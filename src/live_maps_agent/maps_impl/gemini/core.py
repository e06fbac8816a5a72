import asyncio
from contextlib import asynccontextmanager
from types import TracebackType
from typing import AsyncIterable, AsyncIterator, Optional

import httpx
from google import genai
from google.genai import types

from live_maps_agent.maps_core import (
    GeocodingClient,
    MapDisplayState,
    MapsToolset,
    Settings,
    StaticMapClient,
    ToolCallDispatcher,
    ToolCallSubscription,
    get_logger,
)
from .adapter import GeminiLiveSession, TextListener
from .config import build_live_config
from .registry import GeminiToolRegistry

logger = get_logger(__name__)


class LiveMapsAgent:
    """
    Connects the map tools to a Gemini Live session.

    Owns the HTTP client used by the map services (unless one is passed in), the tool
    registry, and the dispatcher that answers the agent's tool calls.
    """

    def __init__(
        self,
        settings: Settings,
        client: Optional[genai.Client] = None,
        http: Optional[httpx.AsyncClient] = None,
        display: Optional[MapDisplayState] = None,
        on_text: Optional[TextListener] = None,
    ):
        """
        Initializes the agent.

        Args:
            settings: Process configuration; holds the maps credential.
            client: The google-genai client. Built from ``settings.gemini_api_key`` when omitted.
            http: HTTP client for the map services. Created and owned by the agent when omitted.
            display: State receiving the URL of every map selected for display.
            on_text: Called with text produced by the agent.
        """
        self.settings = settings
        self.client = client or genai.Client(api_key=settings.gemini_api_key)
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout))
        self.display = display or MapDisplayState()
        self.on_text = on_text

        self.static_maps = StaticMapClient(self.http, settings.maps_api_key, settings.static_map_url)
        self.toolset = MapsToolset(
            GeocodingClient(self.http, settings.maps_api_key, settings.geocoding_url),
            self.static_maps,
        )
        self.registry = self.toolset.register_into(GeminiToolRegistry())
        self.dispatcher = ToolCallDispatcher(
            registry=self.registry,
            static_maps=self.static_maps,
            media_policy=settings.media_policy,
            on_map_url=self.display.update,
        )
        self.session: Optional[GeminiLiveSession] = None
        logger.info(f"Initialized LiveMapsAgent with model='{settings.model}', media_policy={settings.media_policy}")

    def configure(self) -> types.LiveConnectConfig:
        """The configuration for a new live session."""
        return build_live_config(self.registry, response_modality=self.settings.response_modality)

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[GeminiLiveSession]:
        """
        Open a live session with the tool dispatcher attached.

        The dispatcher is detached and in-flight batches are awaited before the session closes.
        """
        async with self.client.aio.live.connect(model=self.settings.model, config=self.configure()) as session:
            live = GeminiLiveSession(session, on_text=self.on_text)
            async with ToolCallSubscription(live, self.dispatcher):
                self.session = live
                try:
                    yield live
                finally:
                    await live.wait_idle()
                    self.session = None

    async def run(self, prompts: Optional[AsyncIterable[str]] = None) -> None:
        """
        Run one live session.

        Without ``prompts`` the session runs until the server closes it. With ``prompts``
        every item is sent as a user turn and the session ends when they are exhausted.
        """
        async with self.connect() as live:
            pump = asyncio.create_task(live.pump())
            if prompts is None:
                await pump
                return

            try:
                async for text in prompts:
                    if pump.done():
                        break
                    await live.send_text(text)
            finally:
                if not pump.done():
                    pump.cancel()
                try:
                    await pump
                except asyncio.CancelledError:
                    logger.debug("Stopped reading from the live session.")

    async def send_text(self, text: str) -> None:
        """Send a user turn to the open session."""
        if self.session is None:
            raise RuntimeError("No live session is open.")
        await self.session.send_text(text)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "LiveMapsAgent":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()
