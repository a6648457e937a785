"""
Function tools: a typed handler exposed to a tool-calling agent.

Usage:
    from pydantic import BaseModel, Field
    from typing import Literal

    class WeatherArgs(BaseModel):
        city: str = Field(description="City name.")
        units: Literal["celsius", "fahrenheit"]

    async def get_weather(ctx: ToolContext, args: WeatherArgs) -> dict:
        return {"temperature": 22.5, "units": args.units}

    weather = new_function_tool("get_weather", "Get current weather", get_weather)

    weather.to_openai_tool()                     # strict schema for the LLM
    await weather.check_enabled(ctx, agent)      # offer check
    await weather.invoke(ctx, '{"city": "Paris", "units": "celsius"}')

Failure handling in invoke:
    - malformed arguments raise ArgumentDecodeError; the handler is not called,
    - a handler exception goes through failure_error_function, whose return
      value is sent back to the agent (default: a generic masking message),
    - failure_error_function=None re-raises the handler exception as is,
    - an exception from the failure function itself raises FailurePolicyError,
    - cancellation and an expired ToolContext.timeout are never masked.
"""

import asyncio
import copy
import inspect
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional, Union, get_type_hints

from pydantic import TypeAdapter, ValidationError

from strictool.config.tool_config import DEFAULT_FAILURE_MESSAGE, FunctionToolConfig

from .enablement import FunctionToolEnabler, as_enabler, function_tool_enabled
from .errors import (
    ArgumentDecodeError,
    FailurePolicyError,
    SchemaDerivationError,
    ToolDefinitionError,
    ToolTimeoutError,
)
from .schema import ROOT_PATH, derive_json_schema
from .strict_schema import ensure_strict_json_schema, strip_defaulted_nulls

logger = logging.getLogger(__name__)


@dataclass
class ToolContext:
    """Per-call context handed to handlers, failure functions and enablers."""
    context: Any = None
    tool_name: str = ""
    tool_call_id: str = ""
    timeout: Optional[float] = None


ToolErrorFunction = Callable[[ToolContext, Exception], Union[Any, Awaitable[Any]]]
InvocationFn = Callable[[ToolContext, str], Awaitable[Any]]


def default_tool_error_function(ctx: ToolContext, error: Exception) -> str:
    """Default failure function: hide the error behind a generic message."""
    return DEFAULT_FAILURE_MESSAGE


def masking_tool_error_function(message: str) -> ToolErrorFunction:
    """Build a failure function that always reports the given message."""

    def _mask(ctx: ToolContext, error: Exception) -> str:
        return message

    return _mask


class _UseDefault:
    def __repr__(self) -> str:
        return "DEFAULT"


DEFAULT = _UseDefault()


@dataclass(frozen=True)
class FunctionTool:
    """
    Immutable tool descriptor.

    Build one with new_function_tool or the function_tool decorator. To change
    a setting, build a new descriptor (dataclasses.replace works).
    """
    name: str
    description: str
    params_json_schema: Dict[str, Any]
    on_invoke_tool: InvocationFn
    strict_json_schema: bool = True
    failure_error_function: Optional[ToolErrorFunction] = default_tool_error_function
    is_enabled: FunctionToolEnabler = field(default_factory=function_tool_enabled)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ToolDefinitionError("Tool name must be a non-empty string")
        object.__setattr__(self, "is_enabled", as_enabler(self.is_enabled))

    async def check_enabled(self, ctx: Any = None, agent: Any = None) -> bool:
        """Offer check: should this tool be presented to the agent now?"""
        return await self.is_enabled.is_enabled(ctx, agent)

    async def invoke(self, ctx: Optional[ToolContext], arguments: Union[str, bytes, None]) -> Any:
        """
        Decode the wire arguments, run the handler and translate its failure.

        Args:
            ctx: Call context; a fresh ToolContext is used when None.
            arguments: JSON object text as produced by the agent.

        Returns:
            The handler result, or the failure function's value if the handler raised.

        Raises:
            ArgumentDecodeError: arguments do not match the argument type.
            ToolTimeoutError: ctx.timeout expired.
            FailurePolicyError: the failure function raised.
            Exception: the handler's own error when failure_error_function is None.
        """
        if ctx is None:
            ctx = ToolContext(tool_name=self.name)

        invocation = self.on_invoke_tool
        bound = isinstance(invocation, BoundHandler)
        if bound:
            # Decoded outside the handler scope: a handler that raises
            # ArgumentDecodeError itself still goes through the failure function.
            try:
                args = invocation.decode(self.name, arguments)
            except ArgumentDecodeError as exc:
                logger.warning(f"Rejected arguments for tool '{self.name}': {exc.message}")
                raise

        scope = asyncio.timeout(ctx.timeout)
        try:
            async with scope:
                if bound:
                    return await invocation.call(ctx, args)
                return await invocation(ctx, arguments)
        except Exception as exc:
            if isinstance(exc, TimeoutError) and scope.expired():
                logger.error(f"Tool '{self.name}' timed out after {ctx.timeout}s")
                raise ToolTimeoutError(self.name, ctx.timeout) from exc
            if self.failure_error_function is None:
                logger.error(f"Tool '{self.name}' failed and error masking is disabled: {exc}")
                raise
            logger.warning(f"Tool '{self.name}' failed: {exc}", exc_info=True)
            return await self._apply_failure_function(ctx, exc)

    async def _apply_failure_function(self, ctx: ToolContext, error: Exception) -> Any:
        try:
            value = self.failure_error_function(ctx, error)
            if inspect.isawaitable(value):
                value = await value
        except Exception as policy_error:
            if policy_error is error:
                raise
            logger.error(f"Failure function of tool '{self.name}' raised: {policy_error}")
            raise FailurePolicyError(self.name, policy_error) from policy_error
        return value

    def to_openai_tool(self) -> Dict[str, Any]:
        """Export in OpenAI function calling format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": copy.deepcopy(self.params_json_schema),
                "strict": self.strict_json_schema,
            },
        }


def resolve_args_type(handler: Callable) -> Any:
    """Return the annotation of the handler's second parameter (the arguments)."""
    try:
        params = list(inspect.signature(handler).parameters.values())
    except (TypeError, ValueError) as exc:
        raise SchemaDerivationError(ROOT_PATH, f"cannot inspect handler signature: {exc}") from exc

    if len(params) < 2:
        raise SchemaDerivationError(ROOT_PATH, "handler must accept (ctx, args)")

    args_param = params[1]
    try:
        hints = get_type_hints(handler)
    except (NameError, TypeError):
        hints = {}
    annotation = hints.get(args_param.name, args_param.annotation)
    if annotation is inspect.Parameter.empty:
        raise SchemaDerivationError(ROOT_PATH, f"handler parameter '{args_param.name}' has no type annotation")
    return annotation


def decode_arguments(
    tool_name: str,
    adapter: TypeAdapter,
    draft_schema: Dict[str, Any],
    arguments: Union[str, bytes, None],
) -> Any:
    """Parse wire arguments into the argument type, raising ArgumentDecodeError."""
    if arguments is None or not arguments.strip():
        payload: Any = {}
    else:
        try:
            payload = json.loads(arguments)
        except (TypeError, ValueError) as exc:
            raise ArgumentDecodeError(tool_name, f"invalid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise ArgumentDecodeError(tool_name, f"expected a JSON object, got {type(payload).__name__}")

    payload = strip_defaulted_nulls(payload, draft_schema)
    try:
        return adapter.validate_python(payload)
    except ValidationError as exc:
        raise ArgumentDecodeError(tool_name, str(exc), errors=exc.errors(include_url=False)) from exc


class BoundHandler:
    """
    InvocationFn built by new_function_tool.

    Calling it decodes and runs the handler in one step. FunctionTool.invoke
    uses decode() and call() separately so it can tell a malformed payload
    from a handler failure.
    """

    def __init__(self, handler: Callable, args_type: Any, draft_schema: Dict[str, Any]):
        self.handler = handler
        self.args_type = args_type
        self.draft_schema = draft_schema
        self.adapter = TypeAdapter(args_type)

    def decode(self, tool_name: str, arguments: Union[str, bytes, None]) -> Any:
        return decode_arguments(tool_name, self.adapter, self.draft_schema, arguments)

    async def call(self, ctx: ToolContext, args: Any) -> Any:
        result = self.handler(ctx, args)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def __call__(self, ctx: ToolContext, arguments: Union[str, bytes, None]) -> Any:
        return await self.call(ctx, self.decode(ctx.tool_name, arguments))


def new_function_tool(
    name: str,
    description: str,
    handler: Callable,
    *,
    args_type: Any = None,
    strict_json_schema: Optional[bool] = None,
    failure_error_function: Union[ToolErrorFunction, None, _UseDefault] = DEFAULT,
    is_enabled: Any = True,
    config: Optional[FunctionToolConfig] = None,
) -> FunctionTool:
    """
    Build a FunctionTool from a typed handler.

    Args:
        name: Tool name shown to the LLM.
        description: Tool description shown to the LLM (may be empty).
        handler: ``(ctx, args) -> result``, sync or async.
        args_type: Argument type; taken from the handler's annotation if omitted.
        strict_json_schema: Normalize the schema to strict mode (default from config: True).
        failure_error_function: DEFAULT for the masking function, None to re-raise handler errors.
        is_enabled: bool, predicate ``(ctx, agent) -> bool`` or a FunctionToolEnabler.
        config: Defaults for strictness and the masking message.

    Raises:
        ToolDefinitionError: empty name or non-callable handler.
        SchemaDerivationError: the argument type cannot be mapped to a schema.
        SchemaStrictnessError: the schema has no strict form.
    """
    config = config or FunctionToolConfig()
    if not isinstance(name, str) or not name.strip():
        raise ToolDefinitionError("Tool name must be a non-empty string")
    if not callable(handler):
        raise ToolDefinitionError(f"Handler for tool '{name}' is not callable")

    if args_type is None:
        args_type = resolve_args_type(handler)
    strict = config.strict_json_schema if strict_json_schema is None else strict_json_schema

    draft_schema = derive_json_schema(args_type)
    params_json_schema = ensure_strict_json_schema(draft_schema, strict=strict)

    if isinstance(failure_error_function, _UseDefault):
        if config.failure_message == DEFAULT_FAILURE_MESSAGE:
            failure_error_function = default_tool_error_function
        else:
            failure_error_function = masking_tool_error_function(config.failure_message)

    logger.debug(f"Built function tool '{name}' (strict={strict})")
    return FunctionTool(
        name=name,
        description=description or "",
        params_json_schema=params_json_schema,
        on_invoke_tool=BoundHandler(handler, args_type, draft_schema),
        strict_json_schema=strict,
        failure_error_function=failure_error_function,
        is_enabled=as_enabler(is_enabled),
    )
