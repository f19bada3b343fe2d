"""
FastAPI application factory for Talent-Match.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src import __app_name__, __version__
from src.utils.config import get_settings

from .dependencies import APIError
from .matches import router as matches_router


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=__app_name__, version=__version__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(APIError)
    async def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    app.include_router(matches_router, prefix="/api/matches", tags=["matches"])
    return app
