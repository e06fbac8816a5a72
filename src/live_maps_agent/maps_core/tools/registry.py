"""Tool registry abstraction and helper utilities."""

import inspect
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Mapping, Optional, cast

import jsonref  # type: ignore
from pydantic import ValidationError, create_model

from .models import ToolDefinition
from .schema import SchemaValidator, ToolParameterFactory
from ..exceptions import MalformedToolCallError, ToolNotFoundError, ToolRegistrationError, ToolValidationError
from ..logger import get_logger

logger = get_logger(__name__)


class ToolRegistry(ABC):
    """
    Holds the capabilities declared to the agent and maps their names to implementations.

    Declarations are generated from annotated callables: the docstring becomes the
    description and each ``Annotated[..., Field(description=...)]`` parameter becomes a
    property of the argument schema. The generated pydantic model is kept so incoming
    arguments can be validated at the dispatch boundary.
    """

    def __init__(self) -> None:
        self.tools: Dict[str, ToolDefinition] = {}

    def register(self, func: Callable, description: Optional[str] = None) -> None:
        """
        Register a capability.

        Args:
            func: The implementation. Its name becomes the tool name.
            description: Optional description override, the docstring is used otherwise.

        Raises:
            ToolRegistrationError: If the name is already taken.
            ToolValidationError: If the declaration cannot be generated from ``func``.
        """
        tool = self._generate_tool_definition(func, description=description)

        if tool.name in self.tools:
            msg = f"Tool '{tool.name}' is already registered."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        self.tools[tool.name] = tool
        logger.info("Registered tool '%s'.", tool.name)

    def unregister(self, tool_name: str) -> None:
        """Remove a capability.

        Raises:
            ToolNotFoundError: If the tool does not exist in the registry.
        """
        if tool_name not in self.tools:
            raise ToolNotFoundError(f"Tool '{tool_name}' not found in the registry.")
        del self.tools[tool_name]
        logger.info("Unregistered tool '%s'.", tool_name)

    def tool(self, func: Callable) -> Callable:
        """Decorator form of ``register``."""
        self.register(func)
        return func

    def get(self, tool_name: str) -> ToolDefinition:
        try:
            return self.tools[tool_name]
        except KeyError:
            raise ToolNotFoundError(f"Tool '{tool_name}' not found in the registry.") from None

    def validate_arguments(self, tool_name: str, arguments: Mapping[str, Any]) -> Dict[str, Any]:
        """Validate and coerce the arguments of a call against the tool's declaration.

        Args:
            tool_name: Name of the called tool.
            arguments: Raw arguments sent by the agent.

        Returns:
            The arguments with defaults applied.

        Raises:
            ToolNotFoundError: If the tool is not registered.
            MalformedToolCallError: If the arguments do not match the declaration.
        """
        tool = self.get(tool_name)
        if tool.args_model is None:
            return dict(arguments)
        try:
            return tool.args_model(**arguments).model_dump()
        except ValidationError as exc:
            detail = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or '<args>'}: {err['msg']}" for err in exc.errors()
            )
            raise MalformedToolCallError(tool_name, detail) from exc

    @property
    @abstractmethod
    def tool_object(self) -> Any:
        """The provider-specific declaration of all registered tools."""
        pass

    def _generate_tool_definition(self, func: Callable, description: Optional[str] = None) -> ToolDefinition:
        """Generate a ToolDefinition from a callable.

        Raises:
            ToolValidationError: If the function is missing a docstring or parameter descriptions.
        """
        tool_name = func.__name__
        if description is None:
            description = self._get_docstring_from_func(func, tool_name)

        signature = inspect.signature(func)
        fields = self._build_fields(signature, tool_name)

        args_model = create_model(f"{tool_name}Params", **cast(Dict[str, Any], fields))
        raw_schema = args_model.model_json_schema()
        SchemaValidator.assert_no_recursive_refs(raw_schema)

        # proxies=False gives back a plain dict instead of JsonRef objects
        parameters_schema = jsonref.replace_refs(raw_schema, proxies=False)
        parameters_schema = SchemaValidator.sanitize_schema(parameters_schema)

        return ToolDefinition(
            name=tool_name,
            description=description,
            func=func,
            parameters=parameters_schema,
            args_model=args_model,
        )

    @staticmethod
    def _get_docstring_from_func(func: Callable, tool_name: str) -> str:
        doc = inspect.getdoc(func)
        if not doc:
            msg = f"Tool '{tool_name}' missing docstring. The agent needs a description of what the tool does."
            logger.error(msg)
            raise ToolValidationError(msg)
        return doc

    @staticmethod
    def _build_fields(signature: inspect.Signature, tool_name: str) -> Dict[str, Any]:
        fields: Dict[str, Any] = {}
        for param_name, param in signature.parameters.items():
            if param_name == "self":
                continue
            fields[param_name] = ToolParameterFactory.build_field(param_name, param, tool_name)
        return fields
