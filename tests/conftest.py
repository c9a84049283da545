"""Shared test fixtures."""

import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

import pytest

from receipt_scanner.config import Settings
from receipt_scanner.containers import AppContainer
from receipt_scanner.domain.receipts import EncodedImagePart, ImageResource
from receipt_scanner.services.encoding import encode_image
from receipt_scanner.services.inference import InferenceGateway, ReceiptVisionClient
from receipt_scanner.services.receipts import ReceiptScanService
from receipt_scanner.services.validation import ReceiptItemValidator

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"receipt-pixels"

RECEIPT_ITEMS = [
    {"name": "Milk", "shelfLife": "7 days", "storage": "Fridge"},
    {"name": "Rice", "shelfLife": "1 year", "storage": "Pantry"},
]


@dataclass
class FakeReceiptVisionClient(ReceiptVisionClient):
    """Fake vision client returning fixed text and recording calls."""

    text: str = field(default_factory=lambda: json.dumps(RECEIPT_ITEMS))
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def generate(
        self,
        *,
        model: str,
        image: EncodedImagePart,
        prompt: str,
    ) -> str:
        self.calls.append({"model": model, "image": image, "prompt": prompt})
        if self.error is not None:
            raise self.error
        return self.text


@dataclass
class CountingEncoder:
    """Encoder wrapper that counts invocations."""

    calls: int = 0

    async def __call__(self, image: ImageResource) -> EncodedImagePart:
        self.calls += 1
        return await encode_image(image)


@pytest.fixture(autouse=True)
def app_logger_state() -> Iterator[None]:
    """Reset the package logger so configure_logging calls do not leak."""
    logger = logging.getLogger("receipt_scanner")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        inference_provider="openai",
        openai_api_key="openai-key",
        inference_timeout_seconds=5.0,
    )


@pytest.fixture
def vision_client() -> FakeReceiptVisionClient:
    return FakeReceiptVisionClient()


@pytest.fixture
def gateway(vision_client: FakeReceiptVisionClient) -> InferenceGateway:
    return InferenceGateway(
        client=vision_client, model="test-model", timeout_seconds=5.0
    )


@pytest.fixture
def container(settings: Settings, gateway: InferenceGateway) -> AppContainer:
    service = ReceiptScanService(gateway=gateway, validator=ReceiptItemValidator())

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        receipt_scan_service=service,
        close_resources=close_resources,
    )
