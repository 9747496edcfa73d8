"""
Build Anthropic-compatible tool schemas from Wayfinder's parameter models.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Type

from pydantic import BaseModel


def _resolve_refs(schema_obj: Any, definitions: Mapping[str, Any]) -> Any:
    """Recursively inline ``$ref`` references from ``definitions``."""
    if isinstance(schema_obj, dict):
        ref_path = schema_obj.get("$ref")
        if isinstance(ref_path, str) and ref_path.startswith("#/$defs/"):
            # e.g. "#/$defs/FindParams" -> "FindParams"
            def_name = ref_path.split("/")[-1]
            if def_name in definitions:
                return _resolve_refs(definitions[def_name], definitions)
            return schema_obj
        return {key: _resolve_refs(value, definitions) for key, value in schema_obj.items()}
    if isinstance(schema_obj, list):
        return [_resolve_refs(item, definitions) for item in schema_obj]
    return schema_obj


def build_pydantic_tool_schema(
    model: Type[BaseModel],
    name: str,
    description: str,
    *,
    additional_required: list[str] | None = None,
) -> Dict[str, Any]:
    """
    Build an Anthropic tool schema directly from a Pydantic model.

    Property names use the model's aliases, so the schema advertises the
    same camelCase keys the dispatcher accepts.

    Args:
        model: The Pydantic model class to generate the schema from.
        name: The tool name to use in the schema.
        description: The tool description.
        additional_required: Additional field names to mark as required.

    Returns:
        A dictionary representing the JSON schema for the tool.
    """
    model_schema = model.model_json_schema(by_alias=True)
    properties = dict(model_schema.get("properties", {}))
    required = list(model_schema.get("required", []))

    if additional_required:
        for field_name in additional_required:
            if field_name not in required and field_name in properties:
                required.append(field_name)

    properties = _resolve_refs(properties, model_schema.get("$defs", {}))
    for prop in properties.values():
        if isinstance(prop, dict):
            prop.pop("title", None)

    return {
        "name": name,
        "description": description,
        "input_schema": {
            "type": "object",
            "properties": properties,
            "required": required,
        },
    }


def build_action_tool_schema(
    models: Mapping[str, Type[BaseModel]],
    name: str,
    description: str,
) -> Dict[str, Any]:
    """Merge several per-action models into one schema keyed by an ``action`` enum.

    Properties shared between actions are emitted once; the first model
    declaring a property supplies its description.
    """
    properties: dict[str, Any] = {
        "action": {
            "type": "string",
            "enum": list(models),
            "description": "Operation to perform: " + ", ".join(models),
        }
    }
    for model in models.values():
        schema = build_pydantic_tool_schema(model, name, description)
        for prop_name, prop in schema["input_schema"]["properties"].items():
            properties.setdefault(prop_name, prop)

    return {
        "name": name,
        "description": description,
        "input_schema": {
            "type": "object",
            "properties": properties,
            "required": ["action"],
        },
    }


__all__ = ["build_action_tool_schema", "build_pydantic_tool_schema"]
