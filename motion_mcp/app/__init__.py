"""
motion-mcp servers: MCP stdio (mcp_server) and HTTP (main).
"""
