from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1.router import router as v1_router
from app.core.config import Settings, load_settings
from app.core.errors import MissingRequiredFieldError, validation_problem
from app.core.logging import configure_logging, get_logger

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.title, version=settings.version)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(MissingRequiredFieldError)
    def missing_required_handler(request: Request, exc: MissingRequiredFieldError):
        # Client input defect, not a server fault.
        logger.info(
            "Rejected %s %s: missing required fields %s",
            request.method,
            request.url.path,
            sorted(exc.failures),
        )
        return JSONResponse(status_code=422, content=validation_problem(exc.failures))

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    app.include_router(v1_router, prefix="/v1")
    return app


def run() -> None:
    import uvicorn

    settings = load_settings()
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port, reload=settings.reload)


app = create_app()

if __name__ == "__main__":  # pragma: no cover
    run()
