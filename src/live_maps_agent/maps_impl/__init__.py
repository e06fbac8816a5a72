"""Provider implementations of the live maps agent."""

from .gemini import LiveMapsAgent, GeminiToolRegistry, GeminiLiveSession, build_live_config

__all__ = ["LiveMapsAgent", "GeminiToolRegistry", "GeminiLiveSession", "build_live_config"]
