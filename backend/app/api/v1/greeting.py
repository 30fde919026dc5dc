from fastapi import APIRouter

from app.contracts.guard import RequiredFieldsRoute
from app.domain.greet import greet
from app.domain.schema import GreetingRequest, GreetingResponse

router = APIRouter(tags=["greeting"], route_class=RequiredFieldsRoute)


@router.post("/greeting", response_model=GreetingResponse)
def greeting(req: GreetingRequest) -> GreetingResponse:
    return greet(req)
