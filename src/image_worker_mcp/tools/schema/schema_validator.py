from typing import Any, Dict, Iterable

from ...core.logger import get_logger

logger = get_logger(__name__)


class SchemaValidator:
    """
    Helper class for cleaning the JSON schemas advertised in the tool catalog.
    """

    @staticmethod
    def sanitize_schema(schema: Any) -> Any:
        """
        Cleans up a Pydantic-generated schema for MCP clients.
        Removes $defs, $schema, $id, title.
        Simplifies Optional fields (anyOf with null).

        Args:
            schema: The JSON schema to sanitize.

        Returns:
            The sanitized schema.
        """
        if not isinstance(schema, dict):
            return schema

        new_schema = schema.copy()

        # 1. Remove metadata keys
        for key in ["$defs", "$schema", "$id", "title", "definitions"]:
            new_schema.pop(key, None)

        # 2. Handle anyOf with null (Optional fields)
        if "anyOf" in new_schema:
            any_of = new_schema["anyOf"]
            non_null = [x for x in any_of if x.get("type") != "null"]

            if len(non_null) == 1 and isinstance(non_null[0], dict):
                # The parent description wins; a None default carries no information.
                merged = non_null[0].copy()
                if "description" in new_schema:
                    merged["description"] = new_schema["description"]
                if new_schema.get("default") is not None:
                    merged["default"] = new_schema["default"]
                return SchemaValidator.sanitize_schema(merged)

        # Recurse on children. Property names are never sanitized themselves.
        for key, value in new_schema.items():
            if key == "properties" and isinstance(value, dict):
                new_schema[key] = {name: SchemaValidator.sanitize_schema(prop) for name, prop in value.items()}
            elif isinstance(value, dict):
                new_schema[key] = SchemaValidator.sanitize_schema(value)
            elif isinstance(value, list):
                new_schema[key] = [
                    SchemaValidator.sanitize_schema(item) if isinstance(item, dict) else item for item in value
                ]

        return new_schema

    @staticmethod
    def require(schema: Dict[str, Any], names: Iterable[str]) -> Dict[str, Any]:
        """
        Returns a copy of an object schema with additional required properties.

        Args:
            schema: The object schema.
            names: Property names to mark as required.

        Returns:
            The updated schema. The input is not modified.
        """
        new_schema = dict(schema)
        required = list(new_schema.get("required", []))
        for name in names:
            if name not in new_schema.get("properties", {}):
                logger.warning("Cannot require unknown property '%s'.", name)
                continue
            if name not in required:
                required.append(name)
        new_schema["required"] = required
        return new_schema
