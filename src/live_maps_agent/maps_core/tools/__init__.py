from .models import ToolDefinition
from .registry import ToolRegistry
from .schema import SchemaValidator, ToolParameterFactory

__all__ = [
    "ToolDefinition",
    "ToolRegistry",
    "SchemaValidator",
    "ToolParameterFactory",
]
