import inspect
from typing import Annotated, Any, Tuple, get_args, get_origin

from pydantic import Field
from pydantic.fields import FieldInfo

from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)


class ToolParameterFactory:
    """Turns the parameters of a tool function into ``create_model`` field definitions."""

    @classmethod
    def build_field(cls, param_name: str, param: inspect.Parameter, tool_name: str) -> Tuple[Any, FieldInfo]:
        """Create the ``(annotation, FieldInfo)`` pair for one function parameter.

        The annotation is passed through untouched, so constraints declared inside
        ``Annotated`` (``ge=1`` and the like) still apply when arguments are validated.
        A parameter without a default becomes a required field.
        """
        description = cls._description_of(param.annotation, param_name, tool_name)
        default = ... if param.default is inspect.Parameter.empty else param.default
        return param.annotation, Field(default=default, description=description)

    @staticmethod
    def _description_of(annotation: Any, param_name: str, tool_name: str) -> str:
        """
        Raises:
            ToolValidationError: If the parameter is not ``Annotated`` with a described ``Field``.
        """
        if get_origin(annotation) is Annotated:
            described = [m for m in get_args(annotation)[1:] if isinstance(m, FieldInfo) and m.description]
            if described:
                return described[-1].description or ""

        msg = (
            f"Parameter '{param_name}' in tool '{tool_name}' is missing a description.\n"
            f"Usage: {param_name}: Annotated[Type, Field(description='...')] = ..."
        )
        logger.error(msg)
        raise ToolValidationError(msg)
