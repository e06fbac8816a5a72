"""Gemini Live implementation."""

from .core import LiveMapsAgent
from .registry import GeminiToolRegistry
from .adapter import GeminiLiveSession
from .config import build_live_config

__all__ = ["LiveMapsAgent", "GeminiToolRegistry", "GeminiLiveSession", "build_live_config"]
