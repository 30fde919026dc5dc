from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from app.contracts.metadata import FieldDescriptor, describe_fields
from app.contracts.naming import NamingPolicy, camel_case

SchemaNode = Dict[str, Any]


def annotate_schema(
    model_cls: type,
    schema: SchemaNode,
    naming_policy: Optional[NamingPolicy] = None,
) -> None:
    """Mark the mandatory fields of `model_cls` as required and non-nullable.

    `schema` is the generated JSON schema object for `model_cls`; it is
    mutated in place. The required list is replaced by exactly the property
    keys that correspond to mandatory fields. Mandatory fields without a
    matching property are ignored.
    """
    policy = naming_policy or camel_case
    mandatory = [d for d in describe_fields(model_cls) if d.is_required]
    properties: Dict[str, SchemaNode] = schema.get("properties") or {}

    matched: List[str] = [
        key for key in properties if any(_corresponds(key, d, policy) for d in mandatory)
    ]

    if matched:
        schema["required"] = matched
    else:
        schema.pop("required", None)

    for key in matched:
        _clear_nullable(properties[key])


def required_schema_hook(
    naming_policy: Optional[NamingPolicy] = None,
) -> Callable[[SchemaNode, type], None]:
    """Build a pydantic `json_schema_extra` callable running `annotate_schema`."""

    def hook(schema: SchemaNode, model_cls: type) -> None:
        annotate_schema(model_cls, schema, naming_policy)

    return hook


def _corresponds(key: str, d: FieldDescriptor, policy: NamingPolicy) -> bool:
    return key in (d.name, d.wire_name, policy(d.name))


def _is_null_schema(node: Any) -> bool:
    return isinstance(node, dict) and node.get("type") == "null"


def _clear_nullable(prop: SchemaNode) -> None:
    # OpenAPI 3.0 style
    if "nullable" in prop:
        prop["nullable"] = False

    # OpenAPI 3.1 / JSON schema style: Optional[X] -> anyOf [X, null]
    for combinator in ("anyOf", "oneOf"):
        branches = prop.get(combinator)
        if not isinstance(branches, list):
            continue
        kept = [b for b in branches if not _is_null_schema(b)]
        if not kept or len(kept) == len(branches):
            continue
        if len(kept) == 1 and isinstance(kept[0], dict):
            del prop[combinator]
            for k, v in kept[0].items():
                prop.setdefault(k, v)
        else:
            prop[combinator] = kept

    type_ = prop.get("type")
    if isinstance(type_, list) and "null" in type_:
        rest = [t for t in type_ if t != "null"]
        prop["type"] = rest[0] if len(rest) == 1 else rest

    if "default" in prop and prop["default"] is None:
        del prop["default"]
