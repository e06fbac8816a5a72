"""Turn registered map tools into Gemini function declarations."""

from typing import List

from google.genai import types

from live_maps_agent.maps_core import ToolRegistry


class GeminiToolRegistry(ToolRegistry):
    """
    ToolRegistry that renders its tools as a single Gemini ``types.Tool``.
    """

    @property
    def tool_object(self) -> types.Tool | None:
        """
        The ``types.Tool`` holding one ``FunctionDeclaration`` per registered tool,
        or None if nothing is registered.
        """
        if not self.tools:
            return None

        declarations: List[types.FunctionDeclaration] = []
        for tool in self.tools.values():
            if tool.parameters and tool.parameters.get("properties"):
                declarations.append(
                    types.FunctionDeclaration(name=tool.name, description=tool.description, parameters=tool.parameters)
                )
            else:
                declarations.append(types.FunctionDeclaration(name=tool.name, description=tool.description))

        return types.Tool(function_declarations=declarations)
