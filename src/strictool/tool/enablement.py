"""
Enablement: decide per offer whether a tool is presented to an agent.

A FunctionTool always carries a FunctionToolEnabler. Plain values given at
construction time are turned into one by as_enabler:

    True / False / None   -> FunctionToolEnabledFlag
    callable(ctx, agent)  -> FunctionToolEnablerFunc (sync or async predicate)
    anything else         -> ToolDefinitionError

Errors raised by a predicate are not caught here; the caller of the offer
check decides whether to fail open or closed.
"""

import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Union

from .errors import ToolDefinitionError

EnablerPredicate = Callable[[Any, Any], Union[bool, Awaitable[bool]]]


class FunctionToolEnabler(ABC):
    """Evaluated once per offer decision; holds no state between evaluations."""

    @abstractmethod
    async def is_enabled(self, ctx: Any, agent: Any) -> bool:
        ...


@dataclass(frozen=True)
class FunctionToolEnabledFlag(FunctionToolEnabler):
    """Always returns the configured flag."""

    enabled: bool = True

    async def is_enabled(self, ctx: Any, agent: Any) -> bool:
        return self.enabled


@dataclass(frozen=True)
class FunctionToolEnablerFunc(FunctionToolEnabler):
    """Delegates to a predicate ``(ctx, agent) -> bool``, sync or async."""

    predicate: EnablerPredicate

    async def is_enabled(self, ctx: Any, agent: Any) -> bool:
        result = self.predicate(ctx, agent)
        if inspect.isawaitable(result):
            result = await result
        return bool(result)


def function_tool_enabled() -> FunctionToolEnabler:
    return FunctionToolEnabledFlag(True)


def function_tool_disabled() -> FunctionToolEnabler:
    return FunctionToolEnabledFlag(False)


def as_enabler(value: Union[None, bool, EnablerPredicate, FunctionToolEnabler]) -> FunctionToolEnabler:
    """Turn a bool, a predicate or an enabler into a FunctionToolEnabler."""
    if value is None:
        return function_tool_enabled()
    if isinstance(value, FunctionToolEnabler):
        return value
    if isinstance(value, bool):
        return FunctionToolEnabledFlag(value)
    if callable(value):
        return FunctionToolEnablerFunc(value)
    raise ToolDefinitionError(f"is_enabled must be a bool, a callable or a FunctionToolEnabler, got {type(value).__name__}")
