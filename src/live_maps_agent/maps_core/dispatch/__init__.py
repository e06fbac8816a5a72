"""Tool-call dispatch: session protocols, the dispatcher and its scoped subscription."""

from .adapter import SessionAdapter, ToolCallSource, ToolCallHandler
from .dispatcher import ToolCallDispatcher
from .subscription import ToolCallSubscription

__all__ = ["SessionAdapter", "ToolCallSource", "ToolCallHandler", "ToolCallDispatcher", "ToolCallSubscription"]
