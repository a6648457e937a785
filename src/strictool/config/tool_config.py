from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Union

from strictool.util.file_utils import from_json_or_yaml

DEFAULT_FAILURE_MESSAGE = "An error occurred while running the tool. Please try again."
DEFAULT_TOOL_RESULT_MAX_CHARS = 8_000
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ConfigValidationError(ValueError):
    """Raised when tool configuration is structurally invalid."""


def _as_bool(value: Any, *, path: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigValidationError(f"{path} must be a boolean")
    return value


def _as_str(value: Any, *, path: str, allow_empty: bool = False) -> str:
    if not isinstance(value, str):
        raise ConfigValidationError(f"{path} must be a string")
    value = value.strip()
    if not value and not allow_empty:
        raise ConfigValidationError(f"{path} cannot be empty")
    return value


def _as_positive_int(value: Any, *, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigValidationError(f"{path} must be an integer")
    if value <= 0:
        raise ConfigValidationError(f"{path} must be positive")
    return value


@dataclass(frozen=True)
class FunctionToolConfig:
    """
    Defaults applied when building and running function tools.

    Attributes:
        strict_json_schema (bool): Normalize argument schemas to strict mode.
        failure_message (str): Text returned to the agent when a handler fails.
        tool_result_max_chars (int): Upper bound for formatted tool output.
        log_level (str): Level used by setup_logging when no file config is given.
    """

    strict_json_schema: bool = field(
        default=True,
        metadata={"help": "Normalize argument schemas to strict mode."}
    )
    failure_message: str = field(
        default=DEFAULT_FAILURE_MESSAGE,
        metadata={"help": "Text returned to the agent when a handler fails."}
    )
    tool_result_max_chars: int = field(
        default=DEFAULT_TOOL_RESULT_MAX_CHARS,
        metadata={"help": "Upper bound for formatted tool output."}
    )
    log_level: str = field(
        default="INFO",
        metadata={"help": "Logging level for the built-in console config."}
    )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FunctionToolConfig":
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigValidationError("tool config must be a mapping")

        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigValidationError(f"Unknown tool config keys: {', '.join(sorted(unknown))}")

        kwargs: Dict[str, Any] = {}
        if "strict_json_schema" in data:
            kwargs["strict_json_schema"] = _as_bool(data["strict_json_schema"], path="strict_json_schema")
        if "failure_message" in data:
            kwargs["failure_message"] = _as_str(data["failure_message"], path="failure_message")
        if "tool_result_max_chars" in data:
            kwargs["tool_result_max_chars"] = _as_positive_int(
                data["tool_result_max_chars"], path="tool_result_max_chars"
            )
        if "log_level" in data:
            level = _as_str(data["log_level"], path="log_level").upper()
            if level not in VALID_LOG_LEVELS:
                allowed = ", ".join(sorted(VALID_LOG_LEVELS))
                raise ConfigValidationError(f"log_level must be one of: {allowed}")
            kwargs["log_level"] = level
        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "FunctionToolConfig":
        """Load from a JSON or YAML file, optionally nested under a "tool_config" key."""
        data = from_json_or_yaml(path)
        if "tool_config" in data:
            data = data["tool_config"]
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.__dataclass_fields__}
