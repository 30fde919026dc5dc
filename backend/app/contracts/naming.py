"""Naming policies: map a model field name to the key a schema generator emits.

Each policy is a single-argument callable so the annotator can swap
conventions without changing its control flow.
"""
from __future__ import annotations

from typing import Callable

from pydantic.alias_generators import to_camel, to_pascal, to_snake

NamingPolicy = Callable[[str], str]


def identity(name: str) -> str:
    return name


def camel_case(name: str) -> str:
    # "Name" -> "name", "user_name" -> "userName"
    if "_" not in name:
        return name[:1].lower() + name[1:]
    return to_camel(name)


def pascal_case(name: str) -> str:
    # "name" -> "Name", "user_name" -> "UserName"
    if "_" not in name:
        return name[:1].upper() + name[1:]
    return to_pascal(name)


def snake_case(name: str) -> str:
    return to_snake(name)


def kebab_case(name: str) -> str:
    return to_snake(name).replace("_", "-")
