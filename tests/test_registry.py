from typing import Any
from unittest.mock import AsyncMock

import pytest
from mcp.types import Tool

from image_worker_mcp import ToolDispatcher, WorkerConfig
from image_worker_mcp.core import ToolNotFoundError, ToolRegistrationError
from image_worker_mcp.tools import GenerateImageArgs, ToolDefinition, ToolRegistry


async def noop_handler(arguments: dict, on_progress: Any = None) -> list:
    return []


def test_register_generates_schema_from_model() -> None:
    registry = ToolRegistry()
    tool = registry.register("gen", description="Generate.", handler=noop_handler, args_model=GenerateImageArgs)

    assert registry.tools["gen"] is tool
    schema = tool.input_schema
    assert schema["type"] == "object"
    assert schema["required"] == ["prompt"]
    assert schema["properties"]["size"]["default"] == "1024x1024"
    assert schema["properties"]["model"] == {
        "type": "string",
        "description": "AI model to use for generation (optional)",
    }
    assert "title" not in schema


def test_register_without_model_takes_no_arguments() -> None:
    registry = ToolRegistry()
    tool = registry.register("ping", description="Ping.", handler=noop_handler)
    assert tool.input_schema == {"type": "object", "properties": {}, "required": []}


def test_register_definition_object() -> None:
    registry = ToolRegistry()
    registry.register(ToolDefinition(name="custom", description="Custom tool.", handler=noop_handler))
    assert [t.name for t in registry.tool_object] == ["custom"]


def test_register_requires_handler_and_description() -> None:
    registry = ToolRegistry()
    with pytest.raises(ToolRegistrationError, match="handler is required"):
        registry.register("gen", description="Generate.")
    with pytest.raises(ToolRegistrationError, match="description is required"):
        registry.register("gen", handler=noop_handler)


def test_duplicate_registration_fails() -> None:
    registry = ToolRegistry()
    registry.register("gen", description="Generate.", handler=noop_handler)
    with pytest.raises(ToolRegistrationError, match="already registered"):
        registry.register("gen", description="Again.", handler=noop_handler)


def test_get_and_unregister() -> None:
    registry = ToolRegistry()
    registry.register("gen", description="Generate.", handler=noop_handler)

    assert registry.implementations == {"gen": noop_handler}
    registry.unregister("gen")

    with pytest.raises(ToolNotFoundError, match="Unknown tool: gen"):
        registry.get("gen")
    with pytest.raises(ToolNotFoundError):
        registry.unregister("gen")


def test_catalog_lists_generic_tool_and_shortcuts(dispatcher: ToolDispatcher) -> None:
    tools = dispatcher.list_tools()

    assert all(isinstance(t, Tool) for t in tools)
    assert [t.name for t in tools] == ["generate_ai_image", "square_image", "landscape_image", "portrait_image"]

    by_name = {t.name: t for t in tools}
    assert by_name["generate_ai_image"].inputSchema["properties"]["size"]["pattern"] == r"^\d+x\d+$"
    for name in ("square_image", "landscape_image", "portrait_image"):
        schema = by_name[name].inputSchema
        assert "size" not in schema["properties"]
        assert schema["required"] == ["prompt"]
        assert set(schema["properties"]) == {"prompt", "model", "output", "output_dir", "style"}


def test_catalog_is_static(dispatcher: ToolDispatcher) -> None:
    assert dispatcher.list_tools() == dispatcher.list_tools()


def test_catalog_requires_output_dir_when_configured() -> None:
    dispatcher = ToolDispatcher.from_config(WorkerConfig(require_output_dir=True), runner=AsyncMock())

    for tool in dispatcher.list_tools():
        assert tool.inputSchema["required"] == ["prompt", "output_dir"]
