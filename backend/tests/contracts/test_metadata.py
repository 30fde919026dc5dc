import threading
import time
from dataclasses import dataclass, field
from typing import Annotated, List, Optional

from pydantic import BaseModel, Field

import app.contracts.metadata as metadata
from app.contracts.metadata import (
    MANDATORY,
    FieldDescriptor,
    describe_fields,
    required_fields,
)


class Profile(BaseModel):
    name: Annotated[Optional[str], MANDATORY] = None
    nickname: Optional[str] = None
    age: int
    email: Annotated[Optional[str], MANDATORY] = Field(default=None, alias="EmailAddress")


class NoMandatory(BaseModel):
    note: Optional[str] = None


@dataclass
class Order:
    sku: str
    note: Annotated[Optional[str], MANDATORY] = None
    tags: List[str] = field(default_factory=list)
    comment: Optional[str] = None


class Plain:
    title: str
    subtitle: Optional[str] = None
    author: Annotated[Optional[str], MANDATORY] = None


class TestMetadata:
    def test_pydantic_marker_and_native_required(self):
        assert required_fields(Profile) == {"name", "age", "email"}

    def test_pydantic_descriptors_in_declaration_order(self):
        assert describe_fields(Profile) == (
            FieldDescriptor(name="name", wire_name="name", is_required=True),
            FieldDescriptor(name="nickname", wire_name="nickname", is_required=False),
            FieldDescriptor(name="age", wire_name="age", is_required=True),
            FieldDescriptor(name="email", wire_name="EmailAddress", is_required=True),
        )

    def test_no_mandatory_fields_yields_empty_set(self):
        assert required_fields(NoMandatory) == frozenset()

    def test_dataclass(self):
        assert required_fields(Order) == {"sku", "note"}

    def test_plain_annotated_class(self):
        assert required_fields(Plain) == {"title", "author"}

    def test_builtin_types_have_no_fields(self):
        assert describe_fields(str) == ()
        assert required_fields(dict) == frozenset()

    def test_descriptors_are_cached(self):
        assert describe_fields(Profile) is describe_fields(Profile)

    def test_concurrent_first_access_computes_once(self, monkeypatch):
        class Fresh(BaseModel):
            value: Annotated[Optional[str], MANDATORY] = None

        calls = []
        real_inspect = metadata._inspect_fields

        def slow_inspect(model_cls):
            calls.append(model_cls)
            time.sleep(0.05)
            return real_inspect(model_cls)

        monkeypatch.setattr(metadata, "_inspect_fields", slow_inspect)

        barrier = threading.Barrier(8)
        results = []

        def worker():
            barrier.wait()
            results.append(describe_fields(Fresh))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert calls == [Fresh]
        assert len(results) == 8
        assert all(r is results[0] for r in results)
        assert required_fields(Fresh) == {"value"}

    def test_marker_repr(self):
        assert repr(MANDATORY) == "MANDATORY"
