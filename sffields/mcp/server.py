"""MCP Server definition and tool registration"""
import inspect
import logging
from typing import Optional

import pydantic
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from sffields.config import get_settings

logger = logging.getLogger(__name__)

def parse_docstring(func):
    """A simple parser for a standard Python docstring."""
    docstring = inspect.getdoc(func)
    if not docstring:
        return "No description available.", {}

    lines = docstring.strip().split('\n')
    description = lines[0].strip()
    arg_descriptions = {}
    args_section = False

    for line in lines[1:]:
        stripped = line.strip()
        if stripped.lower() in ('args:', 'parameters:'):
            args_section = True
            continue
        if args_section and stripped.lower() in ('returns:', 'raises:'):
            break
        # Only top-level "name: description" lines; continuation lines are indented further
        if args_section and ':' in stripped and line.startswith('    ') and not line.startswith('        '):
            arg_name, arg_desc = stripped.split(':', 1)
            arg_descriptions[arg_name.strip()] = arg_desc.strip()

    return description, arg_descriptions

def create_model_from_func(func, arg_descriptions):
    """Creates a Pydantic model from a function's signature and descriptions."""
    fields = {}
    for param in inspect.signature(func).parameters.values():
        field_info = {
            "description": arg_descriptions.get(param.name, ""),
        }
        if param.default is not inspect.Parameter.empty:
            field_info["default"] = param.default
        fields[param.name] = (param.annotation, pydantic.Field(**field_info))

    return pydantic.create_model(f"{func.__name__}Schema", **fields)

mcp_server = FastMCP(name=get_settings().server_name)

tool_registry = {}

def add_tool_to_registry(func, annotations: Optional[ToolAnnotations] = None):
    """
    Parses a function, generates its schema, and adds it to the global tool_registry.
    """
    tool_name = func.__name__

    try:
        description, arg_descriptions = parse_docstring(func)
        schema = create_model_from_func(func, arg_descriptions)

        tool_registry[tool_name] = {
            "name": tool_name,
            "description": description,
            "schema": schema,
            "annotations": annotations,
            "function": func
        }

        mcp_server.tool(annotations=annotations)(func)
        logger.info(f"✅ Registered tool: '{tool_name}'")

    except Exception as e:
        logger.error(f"❌ Failed to register tool '{tool_name}': {e}")

def register_tool(func=None, *, annotations: Optional[ToolAnnotations] = None):
    """A decorator that registers a function as a tool.

    Usable bare (``@register_tool``) or with MCP tool annotations
    (``@register_tool(annotations=ToolAnnotations(...))``).
    """
    def decorator(f):
        add_tool_to_registry(f, annotations)
        return f

    if func is not None:
        return decorator(func)
    return decorator

__all__ = ['mcp_server', 'register_tool', 'tool_registry']
