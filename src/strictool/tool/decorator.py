"""
function_tool decorator: build a FunctionTool from a plain function.

Usage:
    from strictool.tool import function_tool, ToolContext

    @function_tool
    async def get_weather(ctx: ToolContext, city: str, units: Literal["celsius", "fahrenheit"] = "celsius") -> dict:
        '''
        Get current weather for a city.

        Args:
            city: City name.
            units: Temperature units.
        '''
        ...

The decorator extracts:
- Function name → tool name
- First docstring paragraph → tool description
- Parameters after an optional leading context parameter → argument model
- Default values → optional (nullable in strict mode) parameters
- Docstring "Args:" section → parameter descriptions

It runs at import time, so a function that cannot be turned into a tool
stops the import with SchemaDerivationError or SchemaStrictnessError.
"""

import inspect
import re
from typing import Any, Callable, Dict, List, Optional, Tuple, get_type_hints

from pydantic import Field, create_model

from strictool.config.tool_config import FunctionToolConfig

from .errors import SchemaDerivationError
from .function_tool import DEFAULT, FunctionTool, ToolContext, new_function_tool
from .schema import ROOT_PATH

_CONTEXT_PARAM_NAMES = ("ctx", "context", "tool_context")
_SECTION_HEADERS = ("returns:", "return:", "raises:", "example:", "examples:", "yields:", "note:")
_PARAM_LINE = re.compile(r"^(\*{0,2}\w+)\s*(?:\([^)]*\))?\s*:\s*(.*)$")


def extract_param_descriptions(func: Callable) -> Dict[str, str]:
    """
    Read parameter descriptions from a Google-style docstring.

    Supports:
        Args:
            name: Description, possibly
                continued on the next line.
            name (type): Description.
    """
    doc = inspect.getdoc(func) or ""
    descriptions: Dict[str, List[str]] = {}
    current: Optional[str] = None
    in_args = False

    for line in doc.splitlines():
        stripped = line.strip()
        lowered = stripped.lower()
        if lowered in ("args:", "arguments:", "parameters:"):
            in_args = True
            continue
        if lowered in _SECTION_HEADERS:
            in_args = False
            current = None
            continue
        if not in_args or not stripped:
            continue

        match = _PARAM_LINE.match(stripped)
        if match and not line.startswith(" " * 8):
            current = match.group(1).lstrip("*")
            descriptions[current] = [match.group(2)] if match.group(2) else []
        elif current:
            descriptions[current].append(stripped)

    return {name: " ".join(parts).strip() for name, parts in descriptions.items()}


def docstring_summary(func: Callable) -> str:
    """First paragraph of the docstring, joined into one line."""
    doc = inspect.getdoc(func) or ""
    summary = doc.split("\n\n", 1)[0]
    return " ".join(summary.split())


def _takes_context(param: inspect.Parameter, hints: Dict[str, Any]) -> bool:
    annotation = hints.get(param.name, param.annotation)
    if annotation is ToolContext:
        return True
    return annotation is inspect.Parameter.empty and param.name in _CONTEXT_PARAM_NAMES


def build_args_model(func: Callable, model_name: Optional[str] = None) -> Tuple[type, bool]:
    """
    Build a pydantic model from a function's parameters.

    Returns:
        (model, takes_context) where takes_context tells whether the first
        parameter receives the ToolContext.
    """
    try:
        hints = get_type_hints(func)
    except (NameError, TypeError) as exc:
        raise SchemaDerivationError(ROOT_PATH, f"cannot resolve type hints of {func.__name__}: {exc}") from exc

    params = list(inspect.signature(func).parameters.values())
    takes_context = bool(params) and _takes_context(params[0], hints)
    if takes_context:
        params = params[1:]

    descriptions = extract_param_descriptions(func)
    fields: Dict[str, Any] = {}
    for param in params:
        path = f"{ROOT_PATH}.{param.name}"
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            raise SchemaDerivationError(path, "variadic parameters cannot be described by a schema")
        annotation = hints.get(param.name, param.annotation)
        if annotation is inspect.Parameter.empty:
            raise SchemaDerivationError(path, "parameter has no type annotation")
        default = ... if param.default is inspect.Parameter.empty else param.default
        fields[param.name] = (annotation, Field(default, description=descriptions.get(param.name) or None))

    name = model_name or "".join(part.capitalize() for part in func.__name__.split("_")) + "Args"
    return create_model(name, **fields), takes_context


def function_tool(
    func: Optional[Callable] = None,
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
    strict_json_schema: Optional[bool] = None,
    failure_error_function: Any = DEFAULT,
    is_enabled: Any = True,
    config: Optional[FunctionToolConfig] = None,
) -> Any:
    """
    Decorator that turns a function into a FunctionTool.

    Args:
        name: Override tool name (defaults to function name).
        description: Override description (defaults to the docstring summary).
        strict_json_schema: Normalize the schema to strict mode (default True).
        failure_error_function: DEFAULT masks handler errors; None re-raises them.
        is_enabled: bool, predicate ``(ctx, agent) -> bool`` or a FunctionToolEnabler.
        config: FunctionToolConfig defaults.

    Returns:
        A FunctionTool, or a decorator producing one when called with options.
    """

    def decorator(fn: Callable) -> FunctionTool:
        args_model, takes_context = build_args_model(fn)
        field_names = list(args_model.model_fields)

        def handler(ctx: ToolContext, args: Any) -> Any:
            kwargs = {field_name: getattr(args, field_name) for field_name in field_names}
            if takes_context:
                return fn(ctx, **kwargs)
            return fn(**kwargs)

        return new_function_tool(
            name or fn.__name__,
            description if description is not None else docstring_summary(fn),
            handler,
            args_type=args_model,
            strict_json_schema=strict_json_schema,
            failure_error_function=failure_error_function,
            is_enabled=is_enabled,
            config=config,
        )

    if func is not None:
        return decorator(func)
    return decorator
