"""FastAPI application entrypoint for routedoc service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict

try:  # pragma: no cover - optional dependency
    from fastapi import Depends, FastAPI
    from fastapi.responses import JSONResponse
    from pydantic import BaseModel

    _FASTAPI_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - service mode optional
    FastAPI = None  # type: ignore[assignment]
    Depends = None  # type: ignore[assignment]
    JSONResponse = None  # type: ignore[assignment]
    BaseModel = object  # type: ignore[assignment]
    _FASTAPI_AVAILABLE = False

from ..errors import RouteDocError
from ..extractor import SpecExtractor


class ExtractRequest(BaseModel):
    path: str


class HealthResponse(BaseModel):
    status: str


def _default_extractor() -> SpecExtractor:
    return SpecExtractor()


def create_app(
    extractor_factory: Callable[[], SpecExtractor] = _default_extractor,
) -> FastAPI:
    """Create the FastAPI application exposing specification extraction."""
    if not _FASTAPI_AVAILABLE:  # pragma: no cover - validated via unit tests
        raise RuntimeError(
            "FastAPI is required for service mode. Install it with `pip install routedoc[service]`."
        )

    app = FastAPI(title="RouteDoc Service", version="1.0.0")

    async def get_extractor() -> SpecExtractor:
        return extractor_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/extract")
    async def extract_spec(
        payload: ExtractRequest,
        extractor: SpecExtractor = Depends(get_extractor),
    ) -> Dict[str, Any]:
        def _run_extract() -> Dict[str, Any]:
            return extractor.extract(payload.path).to_dict()

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _run_extract)

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(RouteDocError)
    async def extraction_error_handler(
        _: Any, exc: RouteDocError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc), "error": type(exc).__name__},
        )

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    if not _FASTAPI_AVAILABLE:
        raise RuntimeError(
            "FastAPI is required for service mode. Install it with `pip install routedoc[service]`."
        )

    try:
        import uvicorn
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "uvicorn is required to run the service. Install it with `pip install uvicorn`."
        ) from exc

    app = create_app()
    uvicorn.run(app, host=host, port=port)
