from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass
from typing import Annotated, Any, Dict, FrozenSet, Tuple, get_args, get_origin, get_type_hints

from pydantic import BaseModel


class Mandatory:
    """Marks a field that must carry a value even though its type allows None.

    Usage::

        name: Annotated[Optional[str], MANDATORY] = None
    """

    def __repr__(self) -> str:
        return "MANDATORY"


MANDATORY = Mandatory()


@dataclass(frozen=True)
class FieldDescriptor:
    name: str  # python attribute name
    wire_name: str  # key used in request bodies and generated schemas
    is_required: bool


_cache: Dict[type, Tuple[FieldDescriptor, ...]] = {}
_cache_lock = threading.Lock()
_key_locks: Dict[type, threading.Lock] = {}


def describe_fields(model_cls: type) -> Tuple[FieldDescriptor, ...]:
    """Field descriptors of `model_cls` in declaration order.

    Computed once per type and kept for the lifetime of the process.
    """
    cached = _cache.get(model_cls)
    if cached is not None:
        return cached

    with _cache_lock:
        key_lock = _key_locks.setdefault(model_cls, threading.Lock())

    with key_lock:
        if model_cls not in _cache:
            _cache[model_cls] = _inspect_fields(model_cls)
        return _cache[model_cls]


def required_fields(model_cls: type) -> FrozenSet[str]:
    return frozenset(d.name for d in describe_fields(model_cls) if d.is_required)


def _inspect_fields(model_cls: type) -> Tuple[FieldDescriptor, ...]:
    if isinstance(model_cls, type) and issubclass(model_cls, BaseModel):
        return _inspect_pydantic(model_cls)
    if dataclasses.is_dataclass(model_cls) and isinstance(model_cls, type):
        return _inspect_dataclass(model_cls)
    if isinstance(model_cls, type) and model_cls.__module__ != "builtins":
        return _inspect_annotated_class(model_cls)
    return ()


def _inspect_pydantic(model_cls: type[BaseModel]) -> Tuple[FieldDescriptor, ...]:
    out = []
    for name, info in model_cls.model_fields.items():
        marked = any(isinstance(m, Mandatory) for m in info.metadata)
        if isinstance(info.validation_alias, str):
            wire_name = info.validation_alias
        else:
            wire_name = info.alias or name
        out.append(
            FieldDescriptor(
                name=name,
                wire_name=wire_name,
                is_required=marked or info.is_required(),
            )
        )
    return tuple(out)


def _inspect_dataclass(model_cls: type) -> Tuple[FieldDescriptor, ...]:
    hints = _type_hints(model_cls)
    out = []
    for f in dataclasses.fields(model_cls):
        no_default = (
            f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
        )
        out.append(
            FieldDescriptor(
                name=f.name,
                wire_name=f.name,
                is_required=no_default or _is_marked(hints.get(f.name)),
            )
        )
    return tuple(out)


def _inspect_annotated_class(model_cls: type) -> Tuple[FieldDescriptor, ...]:
    hints = _type_hints(model_cls)
    return tuple(
        FieldDescriptor(
            name=name,
            wire_name=name,
            is_required=not hasattr(model_cls, name) or _is_marked(hint),
        )
        for name, hint in hints.items()
        if not name.startswith("_")
    )


def _type_hints(model_cls: type) -> Dict[str, Any]:
    try:
        return get_type_hints(model_cls, include_extras=True)
    except (NameError, TypeError):
        # Unresolvable forward references: fall back to the raw annotations,
        # which still carry Annotated metadata when not stringified.
        return dict(getattr(model_cls, "__annotations__", {}))


def _is_marked(hint: Any) -> bool:
    if get_origin(hint) is not Annotated:
        return False
    return any(isinstance(m, Mandatory) for m in get_args(hint)[1:])
