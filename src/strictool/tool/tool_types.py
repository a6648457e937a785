from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional, Union


def _get(obj: Any, key: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


def _raw_arguments(arguments: Any) -> Union[str, bytes]:
    # Bytes stay undecoded; decode_arguments reports bad UTF-8 as ArgumentDecodeError.
    if arguments is None:
        return ""
    if isinstance(arguments, (str, bytes)):
        return arguments
    if isinstance(arguments, (bytearray, memoryview)):
        return bytes(arguments)
    return json.dumps(arguments)


@dataclass
class ToolCall:
    """A tool call as selected by the agent: id, tool name and raw JSON arguments."""
    id: str
    name: str
    arguments: Union[str, bytes]

    @classmethod
    def from_any(cls, obj: Any) -> Optional["ToolCall"]:
        """
        Accept a ToolCall, a chat-completions entry ({"id", "function": {...}}),
        a flat {"name", "arguments"} dict, or an SDK object with those attributes.
        Returns None when no tool name is present.
        """
        if obj is None or isinstance(obj, ToolCall):
            return obj
        source = _get(obj, "function") or obj
        name = _get(source, "name")
        if not name:
            return None
        call_id = _get(obj, "id") or _get(obj, "call_id") or ""
        return cls(id=str(call_id), name=str(name), arguments=_raw_arguments(_get(source, "arguments")))
