from typing import Any, Dict, Set

from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)

_METADATA_KEYS = ("$defs", "$schema", "$id", "title", "definitions")


class SchemaValidator:
    """
    Checks and cleans generated JSON schemas before they are declared to the agent.
    """

    @staticmethod
    def assert_no_recursive_refs(schema: Dict[str, Any]) -> None:
        """
        Walks local ``$ref``s and fails on the first cycle.

        Args:
            schema: The JSON schema to check.

        Raises:
            ToolValidationError: If a recursive reference is found.
        """
        defs = schema.get("$defs", {}) or schema.get("definitions", {})

        def check(node: Any, path: Set[str]) -> None:
            if isinstance(node, dict):
                ref = node.get("$ref")
                if ref is not None:
                    if ref in path:
                        msg = f"Recursive structure detected: {ref}. Tool arguments must be finite trees."
                        logger.error(msg)
                        raise ToolValidationError(msg)

                    # e.g. #/$defs/MyModel
                    def_name = ref.rsplit("/", 1)[-1]
                    if ref.startswith("#") and def_name in defs:
                        check(defs[def_name], path | {ref})
                    return

                for value in node.values():
                    check(value, path)
            elif isinstance(node, list):
                for item in node:
                    check(item, path)

        check(schema, set())

    @staticmethod
    def sanitize_schema(schema: Any) -> Any:
        """
        Strips metadata pydantic adds, collapses ``Optional[X]`` to ``X``, and drops
        ``additionalProperties`` which the Gemini function schema does not accept.

        Args:
            schema: The JSON schema to sanitize.

        Returns:
            The sanitized schema.
        """
        if not isinstance(schema, dict):
            return schema

        new_schema = {k: v for k, v in schema.items() if k not in _METADATA_KEYS and k != "additionalProperties"}

        any_of = new_schema.get("anyOf")
        if any_of:
            non_null = [x for x in any_of if x.get("type") != "null"]
            if len(non_null) == 1 and isinstance(non_null[0], dict):
                merged = {k: v for k, v in new_schema.items() if k != "anyOf"}
                merged.update(non_null[0])
                if "description" in new_schema:
                    merged["description"] = new_schema["description"]
                return SchemaValidator.sanitize_schema(merged)

        for key, value in new_schema.items():
            if key == "properties" and isinstance(value, dict):
                # property names are user data, only their schemas get cleaned
                new_schema[key] = {name: SchemaValidator.sanitize_schema(prop) for name, prop in value.items()}
            elif isinstance(value, dict):
                new_schema[key] = SchemaValidator.sanitize_schema(value)
            elif isinstance(value, list):
                new_schema[key] = [SchemaValidator.sanitize_schema(item) for item in value]

        return new_schema
