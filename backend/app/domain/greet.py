from __future__ import annotations

from app.contracts.guard import check_required
from app.core.errors import MissingRequiredFieldError
from app.domain.schema import GreetingRequest, GreetingResponse


def greet(req: GreetingRequest) -> GreetingResponse:
    # Routes run the guard first; direct callers get the same error.
    if req.name is None:
        raise MissingRequiredFieldError(check_required(req))
    return GreetingResponse(greeting=f"HELLO {req.name.upper()}")
