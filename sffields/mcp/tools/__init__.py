import importlib
import logging
import pkgutil

logger = logging.getLogger(__name__)

# This code dynamically finds and imports all Python modules in this
# directory. When each module is imported, any functions decorated with
# @register_tool will be automatically added to the mcp_server instance.
# Logged rather than printed: stdout carries the MCP stdio stream.
logger.info("--- [MCP] Discovering and loading tools ---")
for _, name, _ in pkgutil.iter_modules(__path__):
    importlib.import_module(f".{name}", __package__)
    logger.info("  -> [MCP] Loaded tools from: %s.py", name)
logger.info("--- [MCP] Tool loading complete ---")
