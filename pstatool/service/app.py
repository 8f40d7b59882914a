"""FastAPI application serving rendered stats cards."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from ..card import render_card
from ..config import ConfigError, Settings, load_settings
from ..logging import get_logger
from ..models import ClocData

SVG_MEDIA_TYPE = "image/svg+xml"

logger = get_logger("service")


class RenderRequest(BaseModel):
    title: str
    cloc: Dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    status: str


def _default_settings() -> Settings:
    return load_settings()


def create_app(
    settings_factory: Callable[[], Settings] = _default_settings,
) -> FastAPI:
    """Create the FastAPI application exposing written and on-demand cards."""

    app = FastAPI(title="pstatool", version="1.0.0")
    settings = settings_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/cards/{user}/{project}.svg")
    async def get_card(user: str, project: str) -> Response:
        card = _card_path(settings.svg_folder, user, project)
        if card is None or not card.is_file():
            raise HTTPException(status_code=404, detail=f"No card for {user}/{project}")
        return Response(
            content=card.read_text(encoding="utf-8"),
            media_type=SVG_MEDIA_TYPE,
            headers={"Cache-Control": "public, max-age=21600, must-revalidate"},
        )

    @app.post("/render")
    async def render(payload: RenderRequest) -> Response:
        cloc = ClocData.from_dict(payload.cloc)

        def _render() -> str:
            return render_card(payload.title, cloc)

        loop = asyncio.get_running_loop()
        svg = await loop.run_in_executor(None, _render)
        return Response(content=svg, media_type=SVG_MEDIA_TYPE)

    @app.exception_handler(ConfigError)
    async def config_error_handler(
        _: Any, exc: ConfigError
    ) -> JSONResponse:  # pragma: no cover - bundled assets are present in tests
        logger.error("Card assets unavailable: %s", exc)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    return app


def _card_path(folder: Path, user: str, project: str) -> Path | None:
    root = folder.resolve()
    candidate = (root / user / f"{project}.svg").resolve()
    if root not in candidate.parents:
        return None
    return candidate


def run_service(
    host: str = "0.0.0.0", port: int = 8000, settings: Settings | None = None
) -> None:  # pragma: no cover - integration path
    import uvicorn

    if settings is None:
        app = create_app()
    else:
        app = create_app(lambda: settings)
    uvicorn.run(app, host=host, port=port)
