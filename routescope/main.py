# routescope/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from routescope.config import settings
from routescope.core import RouteScopeCore
from routescope.routes.document_routes import router as document_router
from routescope.utils.logger import get_logger
from routescope.utils.response_builder import error_response

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # build the core once per process; routes reach it through app.state
    if getattr(app.state, "core", None) is None:
        app.state.core = RouteScopeCore(settings)
    yield
    await app.state.core.scheduler.drain()


def create_app(core: RouteScopeCore = None) -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description=(
            "Static route discovery for route-registration style web frameworks, "
            "with per-document memoized and debounced recomputation."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.core = core

    # Enable CORS for the local editor integration during development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=error_response("Internal error", exc, status_code=500))

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok"}

    app.include_router(document_router, prefix="/api")
    return app


app = create_app()

if __name__ == "__main__":
    # Run with: uvicorn routescope.main:app --reload
    uvicorn.run("routescope.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
