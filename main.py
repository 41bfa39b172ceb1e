from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from apis.base import api_router
from core.config import settings
from core.logging import setup_logging
from sandbox.orchestrator import Sandbox
from sandbox.registry import list_languages

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    # the scratch directory must exist before the first request is served
    app.state.sandbox = Sandbox.from_settings(settings)
    logger.info(
        "sandbox_ready",
        scratch_dir=str(app.state.sandbox.scratch_dir),
        timeout_seconds=app.state.sandbox.timeout_seconds,
        languages=[config.name for config in list_languages()],
    )
    yield


app = FastAPI(title=settings.PROJECT_NAME, version=settings.PROJECT_VERSION, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router)


@app.exception_handler(Exception)
async def unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_exception", path=request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT)
