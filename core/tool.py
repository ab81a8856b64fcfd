# =============================================================================
# core/tool.py  —  Tool declaration and the tool boundary
# =============================================================================
#
# A Tool pairs a plain Python function with the schema the language model
# sees.  The function returns a report string or raises a ToolFailure.
# Tool.invoke() is the tool boundary: it checks the argument set against
# the schema, calls the function, and turns the outcome into an Envelope.
# It never raises for bad arguments or unsupported domain values.
# =============================================================================

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from core.errors import InvalidArguments, ToolFailure
from core.models import Envelope, Failure, Success

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolParameter:
    """One named argument of a tool."""

    name: str
    type: str = "string"
    description: str = ""

    def declaration(self) -> dict:
        return {"name": self.name, "type": self.type, "description": self.description}


@dataclass(frozen=True)
class Tool:
    """A single named capability exposed to an agent."""

    name: str
    func: Callable[..., str]
    description: str
    parameters: tuple[ToolParameter, ...]

    @property
    def argument_schema(self) -> dict[str, ToolParameter]:
        return {p.name: p for p in self.parameters}

    def declaration(self) -> dict:
        """Tool declaration consumed by the NL capability for grounding."""
        params = [p.declaration() for p in self.parameters]
        return {
            "name": self.name,
            "parameter": params[0] if params else None,
            "parameters": params,
            "docstring": self.description,
        }

    def invoke(self, args: Mapping[str, Any]) -> Envelope:
        logger.info("Tool '%s' invoked with %r", self.name, dict(args))
        try:
            kwargs = self._check_arguments(args)
            report = self.func(**kwargs)
        except ToolFailure as exc:
            return Failure(exc.message)
        return Success(report)

    def _check_arguments(self, args: Mapping[str, Any]) -> dict[str, str]:
        schema = self.argument_schema
        unexpected = sorted(set(args) - set(schema))
        if unexpected:
            raise InvalidArguments(
                f"Unexpected argument(s) for {self.name}: {', '.join(unexpected)}."
            )
        kwargs = {}
        for name in schema:
            value = args.get(name)
            # Only string parameters are declared today.
            if not isinstance(value, str) or not value.strip():
                raise InvalidArguments(
                    f"Missing required argument '{name}' for {self.name}."
                )
            kwargs[name] = value
        return kwargs


def tool_from_function(func: Callable[..., str], **descriptions: str) -> Tool:
    """Build a Tool from a function's name, docstring and signature.

    Every parameter of ``func`` becomes a string ToolParameter; keyword
    arguments supply the per-parameter descriptions.  Parameters that have
    a default value (e.g. an injectable clock) are not part of the schema.
    """
    params = tuple(
        ToolParameter(name=name, description=descriptions.get(name, ""))
        for name, p in inspect.signature(func).parameters.items()
        if p.default is inspect.Parameter.empty
    )
    return Tool(
        name=func.__name__,
        func=func,
        description=inspect.getdoc(func) or "",
        parameters=params,
    )
