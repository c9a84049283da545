"""Gateway to the multimodal inference capability."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from receipt_scanner.domain.errors import ConfigurationError, InferenceError
from receipt_scanner.domain.receipts import EncodedImagePart

_logger = logging.getLogger(__name__)


class ReceiptVisionClient(Protocol):
    """Interface for an image-plus-instructions text generation capability."""

    async def generate(
        self,
        *,
        model: str,
        image: EncodedImagePart,
        prompt: str,
    ) -> str:
        """Return the raw text generated for the image and prompt."""


@dataclass
class InferenceGateway:
    """Send encoded receipts to the configured capability and return raw text."""

    client: ReceiptVisionClient | None
    model: str
    timeout_seconds: float | None = 60.0

    @property
    def is_configured(self) -> bool:
        """Whether a capability client with credentials is available."""
        return self.client is not None

    async def complete(self, image: EncodedImagePart, prompt: str) -> str:
        """Run one inference round-trip, bounded by the configured timeout."""
        if self.client is None:
            raise ConfigurationError("No inference credential is configured")
        try:
            return await asyncio.wait_for(
                self.client.generate(model=self.model, image=image, prompt=prompt),
                timeout=self.timeout_seconds,
            )
        except TimeoutError as exc:
            _logger.warning(
                "Inference timed out after %ss (model=%s)",
                self.timeout_seconds,
                self.model,
            )
            raise InferenceError(
                f"Inference timed out after {self.timeout_seconds}s"
            ) from exc
        except InferenceError:
            raise
        except Exception as exc:
            _logger.warning("Inference failed (model=%s): %s", self.model, exc)
            raise InferenceError(f"Inference call failed: {exc}") from exc
