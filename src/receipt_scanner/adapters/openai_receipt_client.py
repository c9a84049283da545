"""OpenAI Responses API client for receipt extraction."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from receipt_scanner.domain.receipts import EncodedImagePart
from receipt_scanner.services.inference import ReceiptVisionClient
from receipt_scanner.services.prompts import RECEIPT_ITEMS_SCHEMA

# Structured outputs require an object root, so the item array is wrapped.
RESPONSE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {"items": RECEIPT_ITEMS_SCHEMA},
    "required": ["items"],
    "additionalProperties": False,
}


@dataclass
class OpenAIReceiptClient(ReceiptVisionClient):
    """Receipt vision client backed by OpenAI Responses API."""

    client: AsyncOpenAI
    store: bool = False

    @classmethod
    def create(cls, api_key: str, store: bool = False) -> "OpenAIReceiptClient":
        """Create an OpenAI receipt client."""
        return cls(client=AsyncOpenAI(api_key=api_key), store=store)

    async def generate(
        self,
        *,
        model: str,
        image: EncodedImagePart,
        prompt: str,
    ) -> str:
        """Call OpenAI Responses API with structured outputs."""
        response = await self.client.responses.create(
            model=model,
            input=[
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": prompt},
                        {"type": "input_image", "image_url": image.to_data_url()},
                    ],
                }
            ],
            text={
                "format": {
                    "type": "json_schema",
                    "name": "receipt_items",
                    "strict": True,
                    "schema": RESPONSE_SCHEMA,
                }
            },
            store=self.store,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return _unwrap_items(output_text)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()


def _unwrap_items(output_text: str) -> str:
    """Return the item array from the object envelope, or the text unchanged."""
    try:
        payload = json.loads(output_text)
    except json.JSONDecodeError:
        return output_text
    if isinstance(payload, dict) and isinstance(payload.get("items"), list):
        return json.dumps(payload["items"])
    return output_text
