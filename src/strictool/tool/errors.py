"""
Tool errors.

Construction-time errors (ToolDefinitionError and its subclasses) abort tool
registration. Call-time errors are raised from FunctionTool.invoke and are
either fatal for the call (FailurePolicyError, ToolTimeoutError) or a protocol
mismatch (ArgumentDecodeError); raised by invoke itself, none of them pass
through a failure policy.
"""

from typing import Any, Dict, List, Optional


class ToolError(Exception):
    """Base class for all strictool errors."""


class ToolDefinitionError(ToolError):
    """A tool could not be built from the given name, handler or types."""


class SchemaDerivationError(ToolDefinitionError):
    """A type description cannot be mapped to a JSON schema node."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


class SchemaStrictnessError(ToolDefinitionError):
    """A derived schema has no strict-mode representation."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


class ToolRegistrationError(ToolDefinitionError):
    """A tool cannot be added to a registry (empty or duplicate name)."""


class ArgumentDecodeError(ToolError):
    """The wire arguments do not parse into the tool's argument type."""

    def __init__(
        self,
        tool_name: str,
        message: str,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        self.tool_name = tool_name
        self.message = message
        self.errors = errors or []
        super().__init__(f"Failed to parse arguments for tool '{tool_name}': {message}")


class FailurePolicyError(ToolError):
    """The failure function of a tool raised while translating a handler error."""

    def __init__(self, tool_name: str, original: BaseException):
        self.tool_name = tool_name
        self.original = original
        super().__init__(f"Failure function of tool '{tool_name}' raised an error")


class ToolTimeoutError(ToolError):
    """The call deadline expired before the handler returned."""

    def __init__(self, tool_name: str, timeout: float):
        self.tool_name = tool_name
        self.timeout = timeout
        super().__init__(f"Tool '{tool_name}' timed out after {timeout} seconds")
