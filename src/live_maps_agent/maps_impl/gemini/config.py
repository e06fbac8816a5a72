"""Session configuration for the Gemini Live API."""

from typing import Literal

from google.genai import types

from live_maps_agent.maps_core import SYSTEM_INSTRUCTION, get_logger
from .registry import GeminiToolRegistry

logger = get_logger(__name__)


def build_live_config(
    registry: GeminiToolRegistry,
    response_modality: Literal["AUDIO", "TEXT"] = "AUDIO",
    system_instruction: str = SYSTEM_INSTRUCTION,
) -> types.LiveConnectConfig:
    """
    Build the configuration a live session is opened with.

    A new config is built on every call from the registry's current tools, so
    re-configuring a session replaces the declarations instead of adding to them.

    Args:
        registry: Registry with the declared tools.
        response_modality: Modality of the agent's answers.
        system_instruction: Operating instructions for the agent.

    Returns:
        The ``types.LiveConnectConfig`` for ``client.aio.live.connect``.
    """
    tool_obj = registry.tool_object
    tools = [tool_obj] if tool_obj else None
    if tool_obj:
        logger.info("Declaring %d tool(s) to the live session.", len(registry.tools))

    return types.LiveConnectConfig(
        response_modalities=[types.Modality(response_modality)],
        system_instruction=types.Content(parts=[types.Part(text=system_instruction)]),
        tools=tools,
    )
