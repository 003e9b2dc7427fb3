# sffields/main.py
import logging
import sys

from sffields.config import get_settings
from sffields.mcp.server import mcp_server, tool_registry

# IMPORTANT: importing the tools package runs @register_tool for every tool module.
import sffields.mcp.tools  # noqa: F401


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(stream=sys.stderr, level=get_settings().log_level.upper())
    if "--mcp-stdio" in argv:
        logging.info("MCP starting (stdio)")
        logging.info("Tools: %s", ", ".join(tool_registry.keys()) or "(none)")
        mcp_server.run(transport="stdio")
        return 0
    print("Usage: sffields --mcp-stdio", file=sys.stderr)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
