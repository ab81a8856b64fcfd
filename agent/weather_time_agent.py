# =============================================================================
# agent/weather_time_agent.py  —  Agent definition, dispatch and ADK wiring
# =============================================================================
#
# WHAT THIS FILE DOES:
#   1. AgentDefinition binds a name, a model id, an instruction and a
#      ToolRegistry, and validates that they agree with each other.
#   2. AgentDefinition.dispatch() runs ONE dispatch turn: given the tool
#      the language model selected (or None), it resolves the tool, invokes
#      it, and composes the reply.  A missing tool is a refusal, never a
#      crash; a tool error is narrated verbatim, never overwritten.
#   3. create_agent() turns a definition into a Google ADK Agent, wiring
#      the registry's tools in either as in-process FunctionTools or through
#      the FastMCP server in tools/mcp_server.py.
#      Tool names the registry does not hold are caught by a before-tool
#      callback and refused through dispatch(), as in step 2.
#
#   ┌──────────────┐   ToolCall    ┌──────────────┐  invoke   ┌──────────┐
#   │  LLM runtime │ ────────────▶ │   dispatch   │ ────────▶ │   Tool   │
#   │ (Google ADK) │ ◀──────────── │ (this file)  │ ◀──────── │ (core/)  │
#   └──────────────┘  TurnResult   └──────────────┘ Envelope  └──────────┘
# =============================================================================

import logging
import os
import re
import sys
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools import FunctionTool

from agent.prompt import AGENT_NAME, DEFAULT_MODEL, DESCRIPTION, INSTRUCTION, SCOPE_STATEMENT
from core.errors import AgentDefinitionError, UnknownToolReference
from core.models import Envelope, Failure, ToolCall, TurnResult, TurnState
from core.registry import ToolRegistry, build_default_registry
from tools.function_tools import make_function_tools

logger = logging.getLogger(__name__)

# snake_case identifiers with at least one underscore, e.g. get_weather
_TOOL_REFERENCE = re.compile(r"\b[a-z][a-z0-9]*(?:_[a-z0-9]+)+\b")

TRANSPORTS = ("function", "mcp")


def referenced_tool_names(instruction: str) -> list[str]:
    """Tool names mentioned in an instruction, in order of first mention."""
    seen: list[str] = []
    for match in _TOOL_REFERENCE.finditer(instruction):
        if match.group(0) not in seen:
            seen.append(match.group(0))
    return seen


# =============================================================================
# AgentDefinition
# =============================================================================
@dataclass
class AgentDefinition:
    """An instruction policy, a model id and the tool registry it owns.

    Construction fails with AgentDefinitionError when:
      - name is not a valid identifier (ADK requires one)
      - model_id is empty
      - the registry holds no tools
      - the instruction names a tool the registry does not hold

    The registry is frozen once the definition is built.
    """

    name: str
    model_id: str
    instruction: str
    registry: ToolRegistry
    description: str = ""
    scope_statement: str = SCOPE_STATEMENT

    def __post_init__(self):
        if not self.name.isidentifier():
            raise AgentDefinitionError(f"Agent name {self.name!r} is not a valid identifier.")
        if not self.model_id or not self.model_id.strip():
            raise AgentDefinitionError("model_id must be non-empty.")
        if len(self.registry) == 0:
            raise AgentDefinitionError(f"Agent '{self.name}' has no tools.")
        unknown = [n for n in referenced_tool_names(self.instruction) if n not in self.registry]
        if unknown:
            raise UnknownToolReference(unknown)
        self.registry.freeze()

    # -------------------------------------------------------------------------
    # Declarations
    # -------------------------------------------------------------------------
    def declaration(self) -> dict:
        return {
            "name": self.name,
            "model_id": self.model_id,
            "description": self.description,
            "instruction": self.instruction,
            "tools": self.registry.names(),
        }

    @classmethod
    def from_declaration(cls, declaration: Mapping[str, Any], catalog: ToolRegistry) -> "AgentDefinition":
        """Build a definition from a declaration, taking tools from ``catalog``.

        The new registry holds the declared tools in declared order.
        """
        names = list(declaration.get("tools", []))
        unknown = [n for n in names if n not in catalog]
        if unknown:
            raise UnknownToolReference(unknown)
        return cls(
            name=declaration["name"],
            model_id=declaration["model_id"],
            instruction=declaration["instruction"],
            registry=ToolRegistry([catalog.require(n) for n in names]),
            description=declaration.get("description", ""),
        )

    # -------------------------------------------------------------------------
    # One dispatch turn
    # -------------------------------------------------------------------------
    def dispatch(self, utterance: str, call: Optional[ToolCall]) -> TurnResult:
        """Resolve and invoke the selected tool, then compose a reply.

        Never raises for an unknown tool, bad arguments or a tool error.
        """
        path = [TurnState.RECEIVED]
        logger.info("[%s] turn received: %r", self.name, utterance)

        if call is None:
            path.append(TurnState.REFUSED)
            return TurnResult(
                state=TurnState.REFUSED,
                reply=f"I can't help with that. {self.scope_statement}",
                path=path,
            )

        path.append(TurnState.RESOLVING)
        tool = self.registry.get(call.name)
        if tool is None:
            logger.warning("[%s] model selected unknown tool '%s'", self.name, call.name)
            path += [TurnState.TOOL_MISSING, TurnState.REFUSED]
            return TurnResult(
                state=TurnState.REFUSED,
                reply=f"I can't do that: '{call.name}' is not one of my tools. {self.scope_statement}",
                tool_name=call.name,
                path=path,
            )

        path += [TurnState.TOOL_FOUND, TurnState.INVOKING]
        envelope = tool.invoke(call.args)
        path.append(TurnState.SUCCEEDED if envelope.ok else TurnState.FAILED)

        path.append(TurnState.COMPOSING)
        reply = self._compose(envelope)
        path.append(TurnState.RESPONDED)
        return TurnResult(
            state=TurnState.RESPONDED,
            reply=reply,
            tool_name=call.name,
            envelope=envelope,
            path=path,
        )

    def _compose(self, envelope: Envelope) -> str:
        if envelope.ok:
            return envelope.report
        return f"{envelope.error_message} {self.scope_statement}"


def create_default_definition(model_id: Optional[str] = None) -> AgentDefinition:
    """The New-York-only weather and time agent."""
    return AgentDefinition(
        name=AGENT_NAME,
        model_id=model_id or DEFAULT_MODEL,
        instruction=INSTRUCTION,
        description=DESCRIPTION,
        registry=build_default_registry(),
    )


# =============================================================================
# Google ADK wiring
# =============================================================================
def build_model(model_id: str) -> Union[str, LiteLlm]:
    """Gemini ids pass through as strings; "provider/model" ids go via LiteLlm.

    Examples:
        "gemini-2.0-flash"            → "gemini-2.0-flash"
        "openrouter/openai/gpt-4o"    → LiteLlm(model="openrouter/openai/gpt-4o")
    """
    if "/" in model_id:
        return LiteLlm(model=model_id)
    return model_id


def _build_tools(definition: AgentDefinition, transport: str) -> list:
    names = definition.registry.names()

    if transport == "mcp":
        # Imported here so the MCP client stack loads only when selected.
        from google.adk.tools.mcp_tool import MCPToolset, StdioConnectionParams
        from mcp import StdioServerParameters

        project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        return [
            MCPToolset(
                connection_params=StdioConnectionParams(
                    server_params=StdioServerParameters(
                        command=sys.executable,
                        args=["-m", "tools.mcp_server"],
                        cwd=project_root,
                    ),
                ),
                tool_filter=names,
            )
        ]

    functions = make_function_tools(definition.registry)
    missing = [n for n in names if n not in functions]
    if missing:
        raise AgentDefinitionError(f"No function surface for tool(s): {', '.join(missing)}")
    return [FunctionTool(func=functions[n]) for n in names]


def _user_text(tool_context) -> str:
    content = getattr(tool_context, "user_content", None)
    if content is None or not content.parts:
        return ""
    return " ".join(part.text for part in content.parts if part.text)


def refuse_unknown_tools(definition: AgentDefinition):
    """ADK before_tool_callback that answers unregistered tool names itself.

    A registered tool returns None so ADK runs it as usual.  Anything else
    goes through definition.dispatch(), and the refusal reply is handed back
    to the model as an error envelope in place of ADK's own retry hint.
    """

    def before_tool_callback(tool, args, tool_context) -> Optional[dict]:
        if tool.name in definition.registry:
            return None
        result = definition.dispatch(_user_text(tool_context), ToolCall(tool.name, dict(args or {})))
        return Failure(result.reply).to_dict()

    return before_tool_callback


def create_agent(
    definition: Optional[AgentDefinition] = None,
    transport: str = "function",
    model=None,
) -> Agent:
    """Create the Google ADK agent for ``definition``.

    Args:
        definition: Defaults to create_default_definition().
        transport: "function" wires tools in-process as FunctionTools;
            "mcp" starts tools/mcp_server.py as a stdio subprocess.
        model: A BaseLlm instance to use instead of build_model(definition.model_id).

    Returns:
        A configured Google ADK Agent instance.
    """
    if transport not in TRANSPORTS:
        raise AgentDefinitionError(
            f"Unknown tool transport {transport!r}; expected one of {', '.join(TRANSPORTS)}."
        )
    definition = definition or create_default_definition()

    agent = Agent(
        name=definition.name,
        model=model or build_model(definition.model_id),
        description=definition.description,
        instruction=definition.instruction,
        tools=_build_tools(definition, transport),
        before_tool_callback=refuse_unknown_tools(definition),
    )
    logger.info("ADK Agent '%s' defined with tools %s (%s transport)",
                agent.name, definition.registry.names(), transport)
    return agent
