"""
strictool tool system.

Structure:
    - schema: draft JSON schema from a record type
    - strict_schema: strict-mode normalization
    - function_tool: FunctionTool descriptor and invocation pipeline
    - decorator: @function_tool for plain functions
    - enablement: per-offer enable/disable policies
    - registry: name-keyed tool collection and dispatch
"""

from .decorator import function_tool
from .enablement import (
    FunctionToolEnabledFlag,
    FunctionToolEnabler,
    FunctionToolEnablerFunc,
    as_enabler,
    function_tool_disabled,
    function_tool_enabled,
)
from .errors import (
    ArgumentDecodeError,
    FailurePolicyError,
    SchemaDerivationError,
    SchemaStrictnessError,
    ToolDefinitionError,
    ToolError,
    ToolRegistrationError,
    ToolTimeoutError,
)
from .function_tool import (
    DEFAULT,
    FunctionTool,
    ToolContext,
    default_tool_error_function,
    masking_tool_error_function,
    new_function_tool,
)
from .output import format_tool_output
from .registry import ToolRegistry
from .schema import derive_json_schema
from .strict_schema import ensure_strict_json_schema
from .tool_types import ToolCall

__all__ = [
    # Descriptor
    "FunctionTool",
    "ToolContext",
    "new_function_tool",
    "function_tool",
    "DEFAULT",
    "default_tool_error_function",
    "masking_tool_error_function",
    # Schema
    "derive_json_schema",
    "ensure_strict_json_schema",
    # Enablement
    "FunctionToolEnabler",
    "FunctionToolEnabledFlag",
    "FunctionToolEnablerFunc",
    "as_enabler",
    "function_tool_enabled",
    "function_tool_disabled",
    # Registry
    "ToolRegistry",
    "ToolCall",
    "format_tool_output",
    # Errors
    "ToolError",
    "ToolDefinitionError",
    "SchemaDerivationError",
    "SchemaStrictnessError",
    "ToolRegistrationError",
    "ArgumentDecodeError",
    "FailurePolicyError",
    "ToolTimeoutError",
]
