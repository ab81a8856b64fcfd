# =============================================================================
# core/registry.py  —  Tool Registry
# =============================================================================
#
# An ordered, name-keyed collection of Tools.  Insertion order is the order
# the tools are presented to the language model.
#
# RULES:
#   - Names are unique.  A duplicate registration fails and leaves the
#     registry exactly as it was (the first tool is kept).
#   - There is no removal.  Once an AgentDefinition takes ownership it
#     freezes the registry, and further registrations fail.
#   - get() returns None for an unknown name; require() raises ToolNotFound.
# =============================================================================

import logging
from typing import Iterator, Optional

from core.clock import get_current_time
from core.errors import DuplicateToolName, RegistryFrozen, ToolNotFound
from core.tool import Tool, tool_from_function
from core.weather import get_weather

logger = logging.getLogger(__name__)

CITY_DESCRIPTION = "The name of the city, e.g. 'New York'."


class ToolRegistry:
    def __init__(self, tools: Optional[list[Tool]] = None):
        self._tools: dict[str, Tool] = {}
        self._frozen = False
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: Tool) -> None:
        if self._frozen:
            raise RegistryFrozen(f"Cannot register '{tool.name}': registry is frozen.")
        if tool.name in self._tools:
            raise DuplicateToolName(tool.name)
        self._tools[tool.name] = tool
        logger.debug("Registered tool '%s'", tool.name)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> Optional[Tool]:
        return self._tools.get(name)

    def require(self, name: str) -> Tool:
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFound(name)
        return tool

    def names(self) -> list[str]:
        return list(self._tools)

    def declarations(self) -> list[dict]:
        return [tool.declaration() for tool in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[Tool]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    def __repr__(self) -> str:
        return f"ToolRegistry({self.names()!r}, frozen={self._frozen})"


def build_default_registry() -> ToolRegistry:
    """The weather/time toolset: get_weather, then get_current_time."""
    return ToolRegistry([
        tool_from_function(get_weather, city=CITY_DESCRIPTION),
        tool_from_function(get_current_time, city=CITY_DESCRIPTION),
    ])
