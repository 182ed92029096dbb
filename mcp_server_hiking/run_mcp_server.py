"""Entrypoint for running the hiking-planner MCP server.

Usage:
  python -m mcp_server_hiking.run_mcp_server                      # streamable HTTP on :8765/mcp
  python -m mcp_server_hiking.run_mcp_server --transport stdio    # for MCP host configs
"""
from mcp_server_hiking.mcp_tools_hiking.mcp.server import main

if __name__ == "__main__":
    main()
