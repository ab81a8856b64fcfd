# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Serves the default registry's tools over MCP (Model Context Protocol).
#   The agent connects to it when TOOL_TRANSPORT=mcp; ADK starts this module
#   as a subprocess and talks to it over stdin/stdout.
#
# Each MCP tool delegates to the same core Tool the in-process transport
# uses, so both transports return identical envelopes.
#
# RUNNING THIS SERVER:
#   python -m tools.mcp_server
# =============================================================================

import json
import logging
import sys

from fastmcp import FastMCP

from core.models import Envelope, Status
from core.registry import build_default_registry

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: STDOUT carries the MCP JSON stream.
#
#   CYAN   — incoming requests (tool name + arguments)
#   GREEN  — success envelopes
#   YELLOW — error envelopes
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

_ENVELOPE_COLORS = {Status.SUCCESS: _GREEN, Status.ERROR: _YELLOW}

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)
logger = logging.getLogger("mcp_server")


def _log_call(tool_name: str, args: dict) -> None:
    """Log an incoming tool call and its arguments in CYAN."""
    arg_str = ", ".join(f"{k}={v!r}" for k, v in args.items())
    logger.info(f"{_CYAN}{tool_name}({arg_str}){_RESET}")


def _log_envelope(tool_name: str, envelope: Envelope) -> dict:
    """Log the envelope as compact JSON, colored by its status, then return the wire dict."""
    wire = envelope.to_dict()
    color = _ENVELOPE_COLORS[envelope.status]
    logger.info(f"{color}  ← {tool_name} [{envelope.status.value}] "
                f"{json.dumps(wire, separators=(',', ':'))}{_RESET}")
    return wire


REGISTRY = build_default_registry()
REGISTRY.freeze()

mcp = FastMCP("weather-time-tools")


def _dispatch(tool_name: str, **args) -> dict:
    """Invoke a registry tool and return its wire envelope."""
    _log_call(tool_name, args)
    return _log_envelope(tool_name, REGISTRY.require(tool_name).invoke(args))


# =============================================================================
# TOOL 1: get_weather
# =============================================================================
@mcp.tool()
def get_weather(city: str) -> dict:
    """Retrieves the current weather report for a specified city.

    Only New York is supported; any other city returns an error.

    Args:
        city: The name of the city for which to retrieve the weather report.

    Returns:
        {"status": "success", "report": str} or
        {"status": "error", "error_message": str}
    """
    return _dispatch("get_weather", city=city)


# =============================================================================
# TOOL 2: get_current_time
# =============================================================================
@mcp.tool()
def get_current_time(city: str) -> dict:
    """Returns the current time in a specified city.

    Only New York is supported; any other city returns an error.

    Args:
        city: The name of the city for which to retrieve the current time.

    Returns:
        {"status": "success", "report": str} or
        {"status": "error", "error_message": str}
    """
    return _dispatch("get_current_time", city=city)


if __name__ == "__main__":
    mcp.run()
