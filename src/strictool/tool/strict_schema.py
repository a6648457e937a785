"""
Strictness Normalizer: rewrite a draft JSON schema into the strict dialect of
tool-calling protocols.

After normalization, at every depth:
    - every object node lists all of its properties in "required",
    - every object node has "additionalProperties": false,
    - properties that were optional become nullable instead.

Schemas with no strict form (free-form maps, patternProperties, untyped nodes
such as an `Any` field) raise SchemaStrictnessError with the path of the
offending node.
"""

import copy
import logging
from typing import Any, Dict, List, Optional

from .errors import SchemaStrictnessError

logger = logging.getLogger(__name__)

ROOT_PATH = "$"
_NULL_SCHEMA = {"type": "null"}
_DOC_KEYS = ("title", "description")
# A node with none of these accepts any JSON value, open maps included.
_TYPING_KEYS = ("type", "enum", "const", "$ref", "anyOf", "oneOf", "allOf", "properties")


def ensure_strict_json_schema(schema: Dict[str, Any], strict: bool = True) -> Dict[str, Any]:
    """
    Return a strict copy of a draft JSON schema.

    Args:
        schema: Draft schema, as produced by schema.derive_json_schema.
        strict: When False the draft is returned unchanged (as a copy).

    Returns:
        A new schema dict; the input is never mutated.

    Raises:
        SchemaStrictnessError: A node cannot be expressed in strict mode.
    """
    result = copy.deepcopy(schema)
    if not strict:
        return result
    if not isinstance(result, dict):
        raise SchemaStrictnessError(ROOT_PATH, f"expected a schema object, got {type(result).__name__}")
    result = _make_strict(result, ROOT_PATH, result)
    logger.debug(f"Normalized schema to strict mode: {sorted(result.get('properties') or {})}")
    return result


def _make_strict(node: Any, path: str, root: Dict[str, Any]) -> Any:
    if not isinstance(node, dict):
        return node

    if "patternProperties" in node:
        raise SchemaStrictnessError(path, "patternProperties have no strict representation")

    for defs_key in ("$defs", "definitions"):
        defs = node.get(defs_key)
        if isinstance(defs, dict):
            for name in list(defs):
                defs[name] = _make_strict(defs[name], f"{path}.{defs_key}.{name}", root)

    ref = node.get("$ref")
    siblings = {k: v for k, v in node.items() if k not in ("$ref", "$defs", "definitions")}
    if isinstance(ref, str) and siblings:
        # Strict mode rejects keywords next to $ref, so expand the reference in place.
        resolved = copy.deepcopy(resolve_ref(root, ref, path))
        node.pop("$ref")
        for key, value in resolved.items():
            if key not in siblings:
                node[key] = value
        return _make_strict(node, path, root)

    all_of = node.get("allOf")
    if isinstance(all_of, list) and len(all_of) == 1 and isinstance(all_of[0], dict):
        only = node.pop("allOf")[0]
        for key, value in only.items():
            node.setdefault(key, value)
        return _make_strict(node, path, root)

    if not any(key in node for key in _TYPING_KEYS):
        raise SchemaStrictnessError(path, "untyped node has no strict representation")

    if _is_object(node):
        _make_object_strict(node, path, root)

    items = node.get("items")
    if isinstance(items, dict):
        node["items"] = _make_strict(items, f"{path}[]", root)
    elif isinstance(items, list):
        node["items"] = [_make_strict(item, f"{path}[{i}]", root) for i, item in enumerate(items)]

    prefix_items = node.get("prefixItems")
    if isinstance(prefix_items, list):
        node["prefixItems"] = [
            _make_strict(item, f"{path}[{i}]", root) for i, item in enumerate(prefix_items)
        ]

    for key in ("anyOf", "oneOf", "allOf"):
        branches = node.get(key)
        if isinstance(branches, list):
            node[key] = [
                _make_strict(branch, f"{path}.{key}[{i}]", root) for i, branch in enumerate(branches)
            ]

    return node


def _make_object_strict(node: Dict[str, Any], path: str, root: Dict[str, Any]) -> None:
    properties = node.get("properties")
    additional = node.get("additionalProperties")
    if not properties and additional not in (None, False):
        raise SchemaStrictnessError(path, "free-form object (map) has no strict representation")

    properties = properties or {}
    originally_required = set(node.get("required") or [])
    for name in list(properties):
        prop = _make_strict(properties[name], f"{path}.{name}", root)
        if name not in originally_required:
            prop = _make_nullable(prop, root)
        properties[name] = prop

    node["properties"] = properties
    node["required"] = list(properties)
    node["additionalProperties"] = False


def _is_object(node: Dict[str, Any]) -> bool:
    return node.get("type") == "object" or "properties" in node


def _make_nullable(prop: Any, root: Dict[str, Any]) -> Any:
    if not isinstance(prop, dict):
        return prop
    prop.pop("default", None)
    if admits_null(prop, root):
        return prop
    inner = {k: v for k, v in prop.items() if k not in _DOC_KEYS}
    wrapped = {k: prop[k] for k in _DOC_KEYS if k in prop}
    wrapped["anyOf"] = [inner, dict(_NULL_SCHEMA)]
    return wrapped


def admits_null(node: Any, root: Dict[str, Any]) -> bool:
    """Return True when a schema node accepts a JSON null."""
    if not isinstance(node, dict):
        return node is True
    ref = node.get("$ref")
    if isinstance(ref, str):
        try:
            return admits_null(resolve_ref(root, ref, ROOT_PATH), root)
        except SchemaStrictnessError:
            return False
    node_type = node.get("type")
    if node_type == "null" or (isinstance(node_type, list) and "null" in node_type):
        return True
    if None in (node.get("enum") or []):
        return True
    return any(admits_null(branch, root) for branch in (node.get("anyOf") or []) + (node.get("oneOf") or []))


def resolve_ref(root: Dict[str, Any], ref: str, path: str) -> Dict[str, Any]:
    """Resolve a local "#/..." JSON pointer against the root schema."""
    if not ref.startswith("#/"):
        raise SchemaStrictnessError(path, f"unsupported $ref {ref!r}")
    target: Any = root
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        if not isinstance(target, dict) or part not in target:
            raise SchemaStrictnessError(path, f"unresolvable $ref {ref!r}")
        target = target[part]
    if not isinstance(target, dict):
        raise SchemaStrictnessError(path, f"$ref {ref!r} does not point to a schema")
    return target


def _follow(node: Any, root: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Follow $ref, single allOf and single non-null anyOf until a concrete node."""
    seen: List[str] = []
    while isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str) and ref not in seen:
            seen.append(ref)
            try:
                node = resolve_ref(root, ref, ROOT_PATH)
            except SchemaStrictnessError:
                return None
            continue
        for key in ("allOf", "anyOf"):
            branches = [b for b in (node.get(key) or []) if b != _NULL_SCHEMA]
            if len(branches) == 1:
                node = branches[0]
                break
        else:
            return node
    return None


def strip_defaulted_nulls(payload: Any, draft_schema: Dict[str, Any], root: Optional[Dict[str, Any]] = None) -> Any:
    """
    Drop null values the strict schema allowed only because a field was optional.

    Strict normalization turns an optional, non-nullable field (``timeout: int = 30``)
    into a required nullable one. A caller that sends ``null`` for it means "use the
    default", so the key is removed before the payload is validated.

    Args:
        payload: Decoded JSON arguments.
        draft_schema: The schema as derived, before strict normalization.
        root: Root schema for $ref resolution (defaults to draft_schema).
    """
    root = draft_schema if root is None else root
    node = _follow(draft_schema, root)
    if node is None:
        return payload

    if isinstance(payload, dict):
        properties = node.get("properties") or {}
        required = set(node.get("required") or [])
        cleaned: Dict[str, Any] = {}
        for key, value in payload.items():
            prop = properties.get(key)
            if prop is None:
                cleaned[key] = value
                continue
            if value is None and key not in required and not admits_null(prop, root):
                continue
            cleaned[key] = strip_defaulted_nulls(value, prop, root)
        return cleaned

    if isinstance(payload, list):
        items = node.get("items")
        if isinstance(items, dict):
            return [strip_defaulted_nulls(value, items, root) for value in payload]

    return payload
