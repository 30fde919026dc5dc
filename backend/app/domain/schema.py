from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_pascal

from app.contracts.annotate import required_schema_hook
from app.contracts.metadata import MANDATORY


class ApiModel(BaseModel):
    """Base for request/response bodies.

    Wire keys are PascalCase; mandatory fields are marked required and
    non-nullable in the generated schema.
    """

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        json_schema_extra=required_schema_hook(),
    )


class GreetingRequest(ApiModel):
    # Optional at the type level so a missing/null Name still binds;
    # the request guard rejects it before the endpoint runs.
    name: Annotated[Optional[str], MANDATORY] = None


class GreetingResponse(ApiModel):
    greeting: Annotated[Optional[str], MANDATORY] = None
