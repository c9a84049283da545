"""Structural validation of extracted receipt items."""

import json
import logging
from dataclasses import dataclass
from enum import StrEnum

from pydantic import ValidationError

from receipt_scanner.domain.errors import MalformedOutputError
from receipt_scanner.domain.receipts import PantryItemCandidate

_logger = logging.getLogger(__name__)


class StrictnessPolicy(StrEnum):
    """How to treat array elements that fail the item schema."""

    REJECT = "reject"
    DROP = "drop"


@dataclass(frozen=True)
class ReceiptItemValidator:
    """Parse normalized model output into validated pantry items."""

    policy: StrictnessPolicy = StrictnessPolicy.REJECT

    def validate(self, text: str) -> list[PantryItemCandidate]:
        """Return validated items or raise MalformedOutputError."""
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise MalformedOutputError(
                f"Model output is not valid JSON: {exc.msg}", raw_text=text
            ) from exc
        if not isinstance(payload, list):
            raise MalformedOutputError(
                f"Model output must be a JSON array, got {type(payload).__name__}",
                raw_text=text,
            )

        items: list[PantryItemCandidate] = []
        for index, element in enumerate(payload):
            try:
                items.append(_validate_element(element))
            except (ValidationError, TypeError) as exc:
                if self.policy is StrictnessPolicy.REJECT:
                    raise MalformedOutputError(
                        f"Item {index} does not match the receipt item schema",
                        raw_text=text,
                    ) from exc
                _logger.warning("Dropping invalid receipt item %s: %s", index, exc)
        return items


def _validate_element(element: object) -> PantryItemCandidate:
    """Validate one decoded array element."""
    if not isinstance(element, dict):
        raise TypeError(f"expected an object, got {type(element).__name__}")
    return PantryItemCandidate.model_validate(element)
