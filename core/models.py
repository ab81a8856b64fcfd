# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the dispatch layer)
# =============================================================================
#
# These dataclasses define the shape of every value that crosses the
# boundary between the agent runtime and the tools:
#
#   ToolCall    — what the language model selected (tool name + arguments)
#   Success     ┐
#   Failure     ┘ the Envelope: what every tool returns
#   TurnState   — the states a single dispatch turn moves through
#   TurnResult  — what a dispatch turn hands back to the caller
#
# THE ENVELOPE IS A SUM TYPE:
#   A tool result is EITHER a Success carrying a report OR a Failure carrying
#   an error message.  There is no dict where both keys (or neither) could
#   be present; the wire dict is produced only by to_dict().
#
#   Wire shapes:
#     {"status": "success", "report": "..."}
#     {"status": "error",   "error_message": "..."}
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Optional, Union


class Status(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


# -----------------------------------------------------------------------------
# Envelope variants
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Success:
    """A tool produced a natural-language-ready report."""

    report: str
    status: ClassVar[Status] = Status.SUCCESS

    def __post_init__(self):
        if not self.report:
            raise ValueError("Success envelope requires a non-empty report")

    @property
    def ok(self) -> bool:
        return True

    def to_dict(self) -> dict:
        return {"status": self.status.value, "report": self.report}


@dataclass(frozen=True)
class Failure:
    """A tool could not answer; error_message is meant to be narrated."""

    error_message: str
    status: ClassVar[Status] = Status.ERROR

    def __post_init__(self):
        if not self.error_message:
            raise ValueError("Failure envelope requires a non-empty error_message")

    @property
    def ok(self) -> bool:
        return False

    def to_dict(self) -> dict:
        return {"status": self.status.value, "error_message": self.error_message}


Envelope = Union[Success, Failure]


# -----------------------------------------------------------------------------
# ToolCall — the language model's selection for one turn
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolCall:
    name: str
    args: dict[str, Any] = field(default_factory=dict)


# -----------------------------------------------------------------------------
# Dispatch turn state machine
# -----------------------------------------------------------------------------
#   RECEIVED → RESOLVING → TOOL_MISSING → REFUSED
#                        → TOOL_FOUND → INVOKING → SUCCEEDED → COMPOSING → RESPONDED
#                                                → FAILED    → COMPOSING → RESPONDED
#
#   A turn with no tool selected goes straight from RECEIVED to REFUSED.
# -----------------------------------------------------------------------------
class TurnState(str, Enum):
    RECEIVED = "received"
    RESOLVING = "resolving"
    TOOL_MISSING = "tool_missing"
    TOOL_FOUND = "tool_found"
    INVOKING = "invoking"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    COMPOSING = "composing"
    REFUSED = "refused"
    RESPONDED = "responded"


@dataclass
class TurnResult:
    """Outcome of one utterance-in, reply-out dispatch turn."""

    state: TurnState                   # REFUSED or RESPONDED
    reply: str                         # What the agent says to the user
    tool_name: Optional[str] = None    # The tool the model asked for, if any
    envelope: Optional[Envelope] = None  # None unless a tool actually ran
    path: list[TurnState] = field(default_factory=list)

    @property
    def refused(self) -> bool:
        return self.state is TurnState.REFUSED
