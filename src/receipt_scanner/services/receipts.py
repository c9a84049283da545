"""Receipt scanning service that turns receipt photos into pantry items."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from receipt_scanner.domain.errors import (
    ConfigurationError,
    InputError,
    MalformedOutputError,
    UnsupportedMediaError,
)
from receipt_scanner.domain.receipts import (
    EncodedImagePart,
    ImageResource,
    PantryItemCandidate,
)
from receipt_scanner.services.encoding import encode_image
from receipt_scanner.services.inference import InferenceGateway
from receipt_scanner.services.normalization import normalize_response
from receipt_scanner.services.prompts import build_extraction_prompt
from receipt_scanner.services.validation import ReceiptItemValidator

_logger = logging.getLogger(__name__)


@dataclass
class ReceiptScanService:
    """Sequence encoding, inference, normalization and validation."""

    gateway: InferenceGateway
    validator: ReceiptItemValidator = field(default_factory=ReceiptItemValidator)
    encoder: Callable[[ImageResource], Awaitable[EncodedImagePart]] = encode_image

    async def scan_receipt(
        self, image: ImageResource | None
    ) -> list[PantryItemCandidate]:
        """Extract validated pantry items from a receipt image.

        Raises InputError, ConfigurationError, InferenceError or
        MalformedOutputError; nothing partial is returned on failure.
        """
        if image is None:
            raise InputError("No receipt image was provided")
        media_type = image.media_type
        if media_type is not None and not media_type.lower().startswith("image/"):
            raise UnsupportedMediaError(f"Unsupported media type: {media_type}")
        if not self.gateway.is_configured:
            raise ConfigurationError("No inference credential is configured")

        encoded = await self.encoder(image)
        prompt = build_extraction_prompt()
        raw_text = await self.gateway.complete(encoded, prompt)

        try:
            items = self.validator.validate(normalize_response(raw_text))
        except MalformedOutputError as exc:
            exc.raw_text = raw_text
            _logger.warning("Receipt scan produced malformed output: %s", exc)
            _logger.debug("Raw inference text: %s", raw_text)
            raise
        _logger.info("Receipt scan extracted %s items", len(items))
        return items
