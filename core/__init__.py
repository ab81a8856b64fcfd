# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains the tool-dispatch and result-contract layer:
# envelopes, tools, the tool registry, the credential resolver and the
# two reference tools (get_weather, get_current_time).
#
# Nothing in this package imports Google ADK or FastMCP.  The only
# third-party import is python-dotenv, used by core/credentials.py.
# =============================================================================
