"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from receipt_scanner.app_logging import configure_logging
from receipt_scanner.containers import AppContainer
from receipt_scanner.domain.errors import (
    ConfigurationError,
    InferenceError,
    MalformedOutputError,
    ReceiptScanError,
    UnsupportedMediaError,
)
from receipt_scanner.domain.receipts import InMemoryImage

_ERROR_STATUS: dict[type[ReceiptScanError], int] = {
    UnsupportedMediaError: status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    ConfigurationError: status.HTTP_503_SERVICE_UNAVAILABLE,
    InferenceError: status.HTTP_502_BAD_GATEWAY,
    MalformedOutputError: status.HTTP_502_BAD_GATEWAY,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(ReceiptScanError)
    async def receipt_scan_error_handler(
        request: Request, exc: ReceiptScanError
    ) -> JSONResponse:
        logger.warning("Receipt scan failed (%s): %s", exc.code, exc)
        return JSONResponse(
            status_code=_status_for(exc),
            content={"error": exc.code, "message": exc.user_message},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/receipts/scan", response_model=None)
    async def scan_receipt(request: Request) -> dict[str, object] | JSONResponse:
        """Extract pantry items from a raw receipt image body."""
        state_container: AppContainer = request.app.state.container
        max_bytes = state_container.settings.max_image_bytes
        declared_length = _content_length(request)
        if declared_length is not None and declared_length > max_bytes:
            return _too_large(max_bytes)
        content = await read_limited(request.stream(), max_bytes)
        if content is None:
            return _too_large(max_bytes)
        image = (
            InMemoryImage(content=content, media_type=_media_type(request))
            if content
            else None
        )
        items = await state_container.receipt_scan_service.scan_receipt(image)
        return {
            "items": [item.model_dump(mode="json", by_alias=True) for item in items]
        }

    return app


async def read_limited(chunks: AsyncIterator[bytes], max_bytes: int) -> bytes | None:
    """Collect a request body, or return None once it exceeds max_bytes."""
    content = bytearray()
    async for chunk in chunks:
        content.extend(chunk)
        if len(content) > max_bytes:
            return None
    return bytes(content)


def _too_large(max_bytes: int) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        content={
            "error": "image_too_large",
            "message": f"Receipt images must be under {max_bytes} bytes.",
        },
    )


def _content_length(request: Request) -> int | None:
    """Return the declared body length, ignoring malformed headers."""
    raw = request.headers.get("content-length", "").strip()
    return int(raw) if raw.isdigit() else None


def _status_for(exc: ReceiptScanError) -> int:
    """Map a classified scan error to an HTTP status code."""
    for error_type, status_code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def _media_type(request: Request) -> str | None:
    """Return the request media type without parameters."""
    content_type = request.headers.get("content-type")
    if not content_type:
        return None
    return content_type.split(";", 1)[0].strip().lower() or None
