# =============================================================================
# core/errors.py  —  Error Taxonomy
# =============================================================================
#
# Two families of errors live here:
#
#   ToolFailure and its subclasses are RECOVERABLE.  Tool functions raise
#   them; Tool.invoke() catches them at the tool boundary and turns them
#   into a Failure envelope.  They never reach the caller as exceptions.
#
#   Everything else is a FAULT:
#     - ConfigurationError   → fatal at process start (credentials)
#     - AgentDefinitionError → fatal at agent-definition time
#     - ToolNotFound         → raised only by ToolRegistry.require();
#                              during a dispatch turn a missing tool is
#                              a Refused outcome instead
# =============================================================================


class AgentError(Exception):
    """Base class for every error raised by this package."""


# -----------------------------------------------------------------------------
# Recoverable tool-level failures
# -----------------------------------------------------------------------------
class ToolFailure(AgentError):
    """A tool could not produce a report.  The message is shown to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DomainUnsupported(ToolFailure):
    """The argument lies outside the tool's supported domain (e.g. a city)."""


class LookupFailure(ToolFailure):
    """An underlying data source (e.g. the timezone table) rejected the key."""


class InvalidArguments(ToolFailure):
    """The argument set does not satisfy the tool's schema."""


# -----------------------------------------------------------------------------
# Faults
# -----------------------------------------------------------------------------
class ToolNotFound(AgentError, LookupError):
    def __init__(self, name: str):
        super().__init__(f"Tool '{name}' is not registered.")
        self.name = name


class ConfigurationError(AgentError):
    """Credentials could not be resolved to exactly one mode."""

    def __init__(self, message: str, fields: tuple[str, ...] = ()):
        super().__init__(message)
        self.fields = tuple(fields)


class AgentDefinitionError(AgentError):
    """An agent or its tool registry was declared inconsistently."""


class DuplicateToolName(AgentDefinitionError):
    def __init__(self, name: str):
        super().__init__(f"A tool named '{name}' is already registered.")
        self.name = name


class UnknownToolReference(AgentDefinitionError):
    def __init__(self, names: list[str]):
        joined = ", ".join(f"'{n}'" for n in names)
        super().__init__(f"Referenced tool(s) not in registry: {joined}")
        self.names = list(names)


class RegistryFrozen(AgentDefinitionError):
    """Raised when registering into a registry owned by an agent."""
