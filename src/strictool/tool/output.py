"""
Text rendering of tool results for the invoking agent.

Strings pass through. Any other value is JSON-encoded by pydantic-core, so
models, dataclasses, enums and containers read the way pydantic dumps them;
bytes become base64 and unknown objects their repr. Text longer than the limit
is cut and ends with a "...<truncated:N chars>" marker.
"""

import logging
from typing import Any

from pydantic_core import to_json

from strictool.config.tool_config import DEFAULT_TOOL_RESULT_MAX_CHARS

logger = logging.getLogger(__name__)


def truncate_text(value: str, limit: int) -> str:
    """Cut value to at most limit characters, marking how many were dropped."""
    if len(value) <= limit:
        return value
    # Sized for the longest possible count, so the result never exceeds limit.
    keep = limit - len(f"...<truncated:{len(value)} chars>")
    if keep <= 0:
        return value[:limit]
    return value[:keep] + f"...<truncated:{len(value) - keep} chars>"


def render_tool_output(value: Any) -> str:
    if isinstance(value, str):
        return value
    try:
        return to_json(value, fallback=repr, bytes_mode="base64").decode("utf-8")
    except ValueError as exc:
        # Circular references end up here.
        logger.debug(f"Tool result is not JSON serializable, using repr: {exc}")
        return repr(value)


def format_tool_output(value: Any, max_chars: int = DEFAULT_TOOL_RESULT_MAX_CHARS) -> str:
    """Render a tool result as text of at most max_chars characters."""
    return truncate_text(render_tool_output(value), max_chars)
