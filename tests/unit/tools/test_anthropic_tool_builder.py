from __future__ import annotations

from pydantic import BaseModel, Field

from wayfinder.models.tool_params import FindParams, TreeParams
from wayfinder.tools.anthropic_tool_builder import build_action_tool_schema, build_pydantic_tool_schema


class _Inner(BaseModel):
    label: str


class _Outer(BaseModel):
    inner: _Inner
    note: str = Field(default="", description="Free text.")


def test_schema_uses_aliases_and_strips_titles() -> None:
    schema = build_pydantic_tool_schema(TreeParams, "tree", "Directory tree")

    properties = schema["input_schema"]["properties"]
    assert "maxDepth" in properties
    assert "max_depth" not in properties
    assert all("title" not in prop for prop in properties.values())
    assert schema["input_schema"]["required"] == []


def test_additional_required_only_adds_known_fields() -> None:
    schema = build_pydantic_tool_schema(FindParams, "find", "Find", additional_required=["pattern", "bogus"])

    assert schema["input_schema"]["required"] == ["pattern"]


def test_refs_are_inlined() -> None:
    schema = build_pydantic_tool_schema(_Outer, "outer", "Nested model")

    inner = schema["input_schema"]["properties"]["inner"]
    assert "$ref" not in inner
    assert inner["properties"]["label"]["type"] == "string"


def test_action_schema_emits_shared_properties_once() -> None:
    schema = build_action_tool_schema({"tree": TreeParams, "find": FindParams}, "fs", "File system")

    properties = schema["input_schema"]["properties"]
    assert properties["action"]["enum"] == ["tree", "find"]
    assert list(properties).count("includeHidden") == 1
    assert properties["includeHidden"]["description"].startswith("Include hidden files and directories")
