# =============================================================================
# tools/__init__.py
# =============================================================================
# Framework-facing surfaces for the core tools:
#   function_tools.py — plain functions wrapped as ADK FunctionTools
#   mcp_server.py     — the same tools served over MCP by FastMCP
#
# Both delegate to core.tool.Tool.invoke() and return the envelope's wire
# dict.  Neither contains tool logic.
# =============================================================================
