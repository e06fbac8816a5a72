"""Tool definition model shared by the registry and the dispatcher."""

from typing import Any, Callable, Optional, Type

from pydantic import BaseModel


class ToolDefinition(BaseModel):
    """
    A capability the agent may call.

    Attributes:
        name: The unique name of the tool.
        description: What the tool does, shown to the agent.
        func: The callable implementing the tool.
        parameters: JSON schema of the tool's arguments.
        args_model: Pydantic model used to validate and coerce incoming arguments.
    """

    name: str
    description: str
    func: Callable
    parameters: Optional[Any] = None
    args_model: Optional[Type[BaseModel]] = None
