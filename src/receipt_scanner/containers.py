"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from receipt_scanner.adapters.gemini_receipt_client import GeminiReceiptClient
from receipt_scanner.adapters.openai_receipt_client import OpenAIReceiptClient
from receipt_scanner.config import Settings, resolve_api_key, resolve_model
from receipt_scanner.services.inference import InferenceGateway
from receipt_scanner.services.receipts import ReceiptScanService
from receipt_scanner.services.validation import ReceiptItemValidator, StrictnessPolicy


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    receipt_scan_service: ReceiptScanService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    api_key = resolve_api_key(resolved_settings)
    vision_client: OpenAIReceiptClient | GeminiReceiptClient | None = None
    if api_key and resolved_settings.inference_provider == "openai":
        vision_client = OpenAIReceiptClient.create(
            api_key, store=resolved_settings.openai_store
        )
    elif api_key:
        vision_client = GeminiReceiptClient.create(api_key)

    gateway = InferenceGateway(
        client=vision_client,
        model=resolve_model(resolved_settings),
        timeout_seconds=resolved_settings.inference_timeout_seconds,
    )
    receipt_scan_service = ReceiptScanService(
        gateway=gateway,
        validator=ReceiptItemValidator(
            policy=StrictnessPolicy(resolved_settings.validation_policy)
        ),
    )

    async def close_resources() -> None:
        if vision_client is not None:
            await vision_client.close()

    return AppContainer(
        settings=resolved_settings,
        receipt_scan_service=receipt_scan_service,
        close_resources=close_resources,
    )
