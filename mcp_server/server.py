from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP

from bankscreen.tools import registry

mcp = FastMCP("bank-screener")

# Auto-register all SDK tools from the registry
for tool_def in registry.all_tools():
    mcp.tool(name=tool_def.name, description=tool_def.description)(tool_def.fn)


if __name__ == "__main__":
    # stdout carries the MCP protocol; logs go to stderr.
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    mcp.run(transport="stdio")
