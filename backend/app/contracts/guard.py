from __future__ import annotations

import dataclasses
import functools
import inspect
from typing import Any, Callable, Iterable, List

from fastapi.routing import APIRoute
from pydantic import BaseModel

from app.contracts.metadata import describe_fields
from app.core.errors import MissingRequiredFieldError, ValidationFailureMap

_GUARDED_ATTR = "__guards_required__"


def missing_reason(field: str) -> str:
    return f"{field} is required. It cannot be deserialized to null."


def is_absent(value: Any) -> bool:
    # Only None counts; empty strings and containers were supplied by the client.
    return value is None


def check_required(request: Any) -> ValidationFailureMap:
    """Return the mandatory fields of a bound request that came through as null.

    An empty dict means the request passes. Every failing field is reported,
    keyed by the name the client used on the wire. Nested models (also inside
    lists and dicts) are checked too and reported by dotted path, e.g.
    `Address.Street` or `Items[0].Sku`.
    """
    failures: ValidationFailureMap = {}
    _collect_missing(request, "", failures)
    return failures


def _collect_missing(obj: Any, prefix: str, failures: ValidationFailureMap) -> None:
    _missing = object()

    for d in describe_fields(type(obj)):
        path = f"{prefix}{d.wire_name}"
        value = getattr(obj, d.name, _missing)
        if value is _missing or is_absent(value):
            if d.is_required:
                failures[path] = [missing_reason(path)]
            continue
        _collect_nested(value, path, failures)


def _collect_nested(value: Any, path: str, failures: ValidationFailureMap) -> None:
    if _is_model_instance(value):
        _collect_missing(value, f"{path}.", failures)
    elif isinstance(value, (list, tuple)):
        for i, item in enumerate(value):
            _collect_nested(item, f"{path}[{i}]", failures)
    elif isinstance(value, dict):
        for key, item in value.items():
            _collect_nested(item, f"{path}.{key}", failures)


def _is_model_instance(value: Any) -> bool:
    return isinstance(value, BaseModel) or (
        dataclasses.is_dataclass(value) and not isinstance(value, type)
    )


def ensure_required(*requests: Any) -> None:
    failures: ValidationFailureMap = {}
    for request in requests:
        for field, reasons in check_required(request).items():
            failures.setdefault(field, []).extend(reasons)

    if failures:
        raise MissingRequiredFieldError(failures)


def _bound_models(args: Iterable[Any], kwargs: dict) -> List[Any]:
    values = list(args) + list(kwargs.values())
    return [v for v in values if _is_model_instance(v)]


def guard_required(endpoint: Callable) -> Callable:
    """Wrap an endpoint so bound request models are checked before it runs.

    The wrapper keeps the endpoint's signature (and sync/async nature), so
    FastAPI binds parameters exactly as it would for the bare endpoint.
    """
    if getattr(endpoint, _GUARDED_ATTR, False):
        return endpoint

    if inspect.iscoroutinefunction(endpoint):

        @functools.wraps(endpoint)
        async def async_wrapper(*args, **kwargs):
            ensure_required(*_bound_models(args, kwargs))
            return await endpoint(*args, **kwargs)

        wrapper = async_wrapper
    else:

        @functools.wraps(endpoint)
        def sync_wrapper(*args, **kwargs):
            ensure_required(*_bound_models(args, kwargs))
            return endpoint(*args, **kwargs)

        wrapper = sync_wrapper

    setattr(wrapper, _GUARDED_ATTR, True)
    return wrapper


class RequiredFieldsRoute(APIRoute):
    """Route class applying `guard_required` to every endpoint of a router."""

    def __init__(self, path: str, endpoint: Callable[..., Any], **kwargs: Any) -> None:
        super().__init__(path, guard_required(endpoint), **kwargs)
