# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains the agent layer:
#   prompt.py             — instruction, description, scope statement
#   weather_time_agent.py — AgentDefinition, dispatch turns, ADK wiring
#
# The agent owns no tool logic (that lives in core/) and no transport
# code (that lives in tools/).  It decides whether a turn may call a tool
# and how the tool's envelope is turned into a reply.
# =============================================================================
