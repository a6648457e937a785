from .tool_config import ConfigValidationError, FunctionToolConfig

__all__ = [
    "ConfigValidationError",
    "FunctionToolConfig",
]
