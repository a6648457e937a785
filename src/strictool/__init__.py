"""
strictool: typed Python functions as strict-schema tools for LLM tool calling.
"""

from strictool.config import ConfigValidationError, FunctionToolConfig
from strictool.tool import (
    ArgumentDecodeError,
    FailurePolicyError,
    FunctionTool,
    SchemaDerivationError,
    SchemaStrictnessError,
    ToolCall,
    ToolContext,
    ToolError,
    ToolRegistry,
    ToolTimeoutError,
    function_tool,
    new_function_tool,
)

__version__ = "0.1.0"

__all__ = [
    "ArgumentDecodeError",
    "ConfigValidationError",
    "FailurePolicyError",
    "FunctionTool",
    "FunctionToolConfig",
    "SchemaDerivationError",
    "SchemaStrictnessError",
    "ToolCall",
    "ToolContext",
    "ToolError",
    "ToolRegistry",
    "ToolTimeoutError",
    "function_tool",
    "new_function_tool",
]
