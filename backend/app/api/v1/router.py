from fastapi import APIRouter

from app.api.v1.greeting import router as greeting_router

router = APIRouter()


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


router.include_router(greeting_router)
