"""FastAPI application entrypoint for masher service mode."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..markers import DEFAULT_BEGIN_MARKER, DEFAULT_END_MARKER, MarkerError, MarkerPair
from ..merger import merge_with_info


class MarkerRequest(BaseModel):
    document: str
    begin: str = DEFAULT_BEGIN_MARKER
    end: str = DEFAULT_END_MARKER


class PayloadRequest(MarkerRequest):
    payload: str


class MergeResponse(BaseModel):
    document: str
    state: str
    changed: bool


class CheckResponse(BaseModel):
    mashed: bool


class LocateResponse(BaseModel):
    state: str
    begin_tag_index: Optional[int] = None
    end_of_begin_tag_index: Optional[int] = None
    end_tag_index: Optional[int] = None
    end_of_end_tag_index: Optional[int] = None


class HealthResponse(BaseModel):
    status: str


def create_app() -> FastAPI:
    """Create the FastAPI application exposing masher operations."""
    app = FastAPI(title="Masher Service", version="1.0.0")

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/merge", response_model=MergeResponse)
    async def merge_document(request: PayloadRequest) -> MergeResponse:
        markers = MarkerPair(begin=request.begin, end=request.end)
        result = merge_with_info(request.document, markers.begin, request.payload, markers.end)
        return MergeResponse(
            document=result.document,
            state=result.info.state.value,
            changed=result.changed,
        )

    @app.post("/check", response_model=CheckResponse)
    async def check_document(request: PayloadRequest) -> CheckResponse:
        markers = MarkerPair(begin=request.begin, end=request.end)
        return CheckResponse(mashed=markers.is_mashed(request.document, request.payload))

    @app.post("/locate", response_model=LocateResponse)
    async def locate_document(request: MarkerRequest) -> LocateResponse:
        markers = MarkerPair(begin=request.begin, end=request.end)
        return LocateResponse(**markers.locate(request.document).to_dict())

    @app.exception_handler(MarkerError)
    async def marker_error_handler(
        _: Any, exc: MarkerError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
