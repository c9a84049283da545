"""Extraction instructions sent alongside the receipt image."""

from receipt_scanner.domain.receipts import StorageLocation

STORAGE_LABELS: tuple[str, ...] = tuple(location.value for location in StorageLocation)

RECEIPT_ITEMS_SCHEMA: dict[str, object] = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "name": {"type": "string"},
            "shelfLife": {"type": "string"},
            "storage": {"type": "string", "enum": list(STORAGE_LABELS)},
        },
        "required": ["name", "shelfLife", "storage"],
        "additionalProperties": False,
    },
}

_QUOTED_LABELS = [f'"{label}"' for label in STORAGE_LABELS]
_LABEL_CHOICES = ", ".join(_QUOTED_LABELS[:-1]) + f", or {_QUOTED_LABELS[-1]}"
_LABEL_UNION = " | ".join(_QUOTED_LABELS)

_EXTRACTION_PROMPT = f"""\
Analyze this receipt image. Your goal is to extract food and drink items, \
estimate shelf life, and determine storage.

CRITICAL INSTRUCTION: You MUST return ONLY a valid JSON array of objects. \
Do not include any prose and do not wrap the array in markdown code fences.

1. Filter: Only extract food and drink items. Exclude non-food items, taxes, \
fees, and store information.
2. Shelf Life: Provide a realistic estimate (e.g., "7 days", "1 month").
3. Storage: Determine the primary storage location and use one of these words \
ONLY: {_LABEL_CHOICES}.

Schema: [{{"name": string, "shelfLife": string, "storage": \
{_LABEL_UNION}}}]
"""


def build_extraction_prompt() -> str:
    """Return the fixed receipt extraction instructions."""
    return _EXTRACTION_PROMPT
