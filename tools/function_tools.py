# =============================================================================
# tools/function_tools.py  —  Registry tools as plain ADK-callable functions
# =============================================================================
#
# Google ADK builds each tool's declaration from a Python function: the
# function name becomes the tool name, the typed parameters become the
# schema, and the docstring tells the model WHEN to call it.
#
# The functions here are thin wrappers.  Each one looks its tool up in the
# registry it was built for, invokes it, and returns the envelope's wire
# dict:
#     {"status": "success", "report": "..."}
#     {"status": "error",   "error_message": "..."}
#
# They are closures over a registry (rather than module-level functions)
# so an agent only ever calls into the registry it owns.
# =============================================================================

import logging
from typing import Callable

from core.registry import ToolRegistry

logger = logging.getLogger(__name__)


def call_tool(registry: ToolRegistry, name: str, **args) -> dict:
    """Invoke ``name`` from ``registry`` and return the wire dict."""
    envelope = registry.require(name).invoke(args)
    logger.info("%s -> %s", name, envelope.status.value)
    return envelope.to_dict()


def make_function_tools(registry: ToolRegistry) -> dict[str, Callable[..., dict]]:
    """Return ADK-ready functions for the tools ``registry`` holds, keyed by name."""

    def get_weather(city: str) -> dict:
        """Retrieves the current weather report for a specified city.

        Only New York is supported; any other city returns an error.

        Args:
            city (str): The name of the city for which to retrieve the weather report.

        Returns:
            dict: status and result or error msg.
        """
        return call_tool(registry, "get_weather", city=city)

    def get_current_time(city: str) -> dict:
        """Returns the current time in a specified city.

        Only New York is supported; any other city returns an error.

        Args:
            city (str): The name of the city for which to retrieve the current time.

        Returns:
            dict: status and result or error msg.
        """
        return call_tool(registry, "get_current_time", city=city)

    available = {"get_weather": get_weather, "get_current_time": get_current_time}
    return {name: available[name] for name in registry.names() if name in available}
