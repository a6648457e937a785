"""
Schema Deriver: draft JSON schema from a type description.

The type description is any record type pydantic can reflect: a BaseModel
subclass, a dataclass or a TypedDict. Field annotations drive the schema:

    class WeatherArgs(BaseModel):
        city: str = Field(description="City name.")
        units: Literal["celsius", "fahrenheit"] = "celsius"

    derive_json_schema(WeatherArgs)
    # {"type": "object",
    #  "properties": {"city": {...}, "units": {"enum": ["celsius", "fahrenheit"], ...}},
    #  "required": ["city"], "title": "WeatherArgs"}

The draft is not strict yet; see strict_schema.ensure_strict_json_schema.
"""

import dataclasses
import logging
from typing import Any, Dict, Iterator, List, Tuple, get_args, get_type_hints, is_typeddict

from pydantic import BaseModel, TypeAdapter
from pydantic.errors import PydanticUserError

from .errors import SchemaDerivationError

logger = logging.getLogger(__name__)

ROOT_PATH = "$"


def is_record_type(tp: Any) -> bool:
    """Return True for types that map to a JSON object with named fields."""
    if not isinstance(tp, type):
        return False
    if issubclass(tp, BaseModel):
        return True
    return dataclasses.is_dataclass(tp) or is_typeddict(tp)


def record_fields(tp: Any) -> List[Tuple[str, Any]]:
    """List (wire name, annotation) pairs of a record type."""
    if issubclass(tp, BaseModel):
        return [(field.alias or name, field.annotation) for name, field in tp.model_fields.items()]
    hints = get_type_hints(tp)
    if dataclasses.is_dataclass(tp):
        return [(f.name, hints.get(f.name, Any)) for f in dataclasses.fields(tp)]
    return list(hints.items())


def _nested_records(annotation: Any) -> Iterator[Any]:
    if is_record_type(annotation):
        yield annotation
        return
    for arg in get_args(annotation):
        yield from _nested_records(arg)


def _locate_underivable_field(tp: Any, path: str) -> str:
    """Walk a record type and return the path of the first field pydantic cannot reflect."""
    for name, annotation in record_fields(tp):
        field_path = f"{path}.{name}"
        try:
            TypeAdapter(annotation).json_schema()
        except PydanticUserError:
            for nested in _nested_records(annotation):
                return _locate_underivable_field(nested, field_path)
            return field_path
    return path


def _inline_root_ref(schema: Dict[str, Any]) -> Dict[str, Any]:
    # Self-referencing models come back as {"$defs": {...}, "$ref": "#/$defs/Name"}.
    ref = schema.get("$ref")
    if not isinstance(ref, str) or "type" in schema:
        return schema
    defs = schema.get("$defs") or {}
    target = defs.get(ref.rsplit("/", 1)[-1])
    if not isinstance(target, dict):
        return schema
    inlined = dict(target)
    inlined["$defs"] = defs
    return inlined


def derive_json_schema(args_type: Any) -> Dict[str, Any]:
    """
    Derive a draft JSON schema for a record type.

    Args:
        args_type: BaseModel subclass, dataclass or TypedDict.

    Returns:
        A JSON schema dict whose root is an object node.

    Raises:
        SchemaDerivationError: args_type is None, not a record type, or has a
            field pydantic cannot reflect. The error names the field path.
    """
    if args_type is None:
        raise SchemaDerivationError(ROOT_PATH, "no argument type given")

    if not is_record_type(args_type):
        raise SchemaDerivationError(
            ROOT_PATH,
            f"argument type must be a pydantic model, dataclass or TypedDict, got {args_type!r}",
        )

    try:
        schema = TypeAdapter(args_type).json_schema()
    except PydanticUserError as exc:
        path = _locate_underivable_field(args_type, ROOT_PATH)
        raise SchemaDerivationError(path, str(exc)) from exc

    schema = _inline_root_ref(schema)
    if schema.get("type") != "object":
        raise SchemaDerivationError(ROOT_PATH, f"expected an object schema, got {schema.get('type')!r}")

    if not schema.get("properties"):
        # Zero-field records still get a closed, explicit object node.
        schema["properties"] = {}
        schema["additionalProperties"] = False

    logger.debug(f"Derived schema for {getattr(args_type, '__name__', args_type)}: {sorted(schema['properties'])}")
    return schema
