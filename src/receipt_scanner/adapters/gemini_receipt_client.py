"""Google Gemini client for receipt extraction."""

import base64
from dataclasses import dataclass

from google import genai
from google.genai import types

from receipt_scanner.domain.receipts import EncodedImagePart
from receipt_scanner.services.inference import ReceiptVisionClient


@dataclass
class GeminiReceiptClient(ReceiptVisionClient):
    """Receipt vision client backed by the google-genai async API."""

    client: genai.Client

    @classmethod
    def create(cls, api_key: str) -> "GeminiReceiptClient":
        """Create a Gemini receipt client."""
        return cls(client=genai.Client(api_key=api_key))

    async def generate(
        self,
        *,
        model: str,
        image: EncodedImagePart,
        prompt: str,
    ) -> str:
        """Call Gemini with JSON response mode and return the text."""
        image_part = types.Part.from_bytes(
            data=base64.b64decode(image.data),
            mime_type=image.mime_type,
        )
        response = await self.client.aio.models.generate_content(
            model=model,
            contents=[image_part, prompt],
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
            ),
        )
        output_text = response.text
        if not output_text:
            raise RuntimeError("Gemini returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the async client's HTTP session."""
        await self.client.aio.aclose()
