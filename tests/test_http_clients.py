"""Tests for inference capability adapters."""

import asyncio
import base64
import json
from types import SimpleNamespace

from receipt_scanner.adapters.gemini_receipt_client import GeminiReceiptClient
from receipt_scanner.adapters.openai_receipt_client import OpenAIReceiptClient
from receipt_scanner.domain.receipts import EncodedImagePart
from tests.conftest import RECEIPT_ITEMS

IMAGE = EncodedImagePart(
    data=base64.b64encode(b"receipt-bytes").decode("ascii"), mime_type="image/png"
)


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str) -> None:
        self.responses = _FakeResponses(output_text)
        self.closed = False

    async def close(self) -> None:
        self.closed = True


class _FakeGeminiAio:
    def __init__(self, models: "_FakeGeminiModels") -> None:
        self.models = models
        self.closed = False

    async def aclose(self) -> None:
        self.closed = True


class _FakeGeminiModels:
    def __init__(self, text: str) -> None:
        self.text = text
        self.last_kwargs: dict[str, object] | None = None

    async def generate_content(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_kwargs = kwargs
        return SimpleNamespace(text=self.text)


def _gemini_client(text: str) -> tuple[GeminiReceiptClient, _FakeGeminiModels]:
    models = _FakeGeminiModels(text)
    fake = SimpleNamespace(aio=_FakeGeminiAio(models))
    return GeminiReceiptClient(client=fake), models


def test_openai_client_unwraps_items_envelope() -> None:
    fake = _FakeOpenAI(json.dumps({"items": RECEIPT_ITEMS}))
    client = OpenAIReceiptClient(client=fake)

    text = asyncio.run(client.generate(model="gpt-5.2", image=IMAGE, prompt="Scan"))

    assert json.loads(text) == RECEIPT_ITEMS
    payload = fake.responses.last_payload
    assert payload["model"] == "gpt-5.2"
    assert payload["text"]["format"]["type"] == "json_schema"
    content = payload["input"][0]["content"]
    assert content[0] == {"type": "input_text", "text": "Scan"}
    assert content[1]["image_url"].startswith("data:image/png;base64,")


def test_openai_client_passes_through_unexpected_text() -> None:
    client = OpenAIReceiptClient(client=_FakeOpenAI("not json"))

    text = asyncio.run(client.generate(model="gpt-5.2", image=IMAGE, prompt="Scan"))

    assert text == "not json"


def test_openai_client_empty_response_raises() -> None:
    client = OpenAIReceiptClient(client=_FakeOpenAI(""))

    try:
        asyncio.run(client.generate(model="gpt-5.2", image=IMAGE, prompt="Scan"))
    except RuntimeError as exc:
        assert "empty" in str(exc)
    else:
        raise AssertionError("expected RuntimeError")


def test_openai_client_close() -> None:
    fake = _FakeOpenAI("[]")
    client = OpenAIReceiptClient(client=fake)

    asyncio.run(client.close())

    assert fake.closed


def test_gemini_client_requests_json_output() -> None:
    client, models = _gemini_client(json.dumps(RECEIPT_ITEMS))

    text = asyncio.run(
        client.generate(model="gemini-2.5-flash", image=IMAGE, prompt="Scan")
    )

    assert json.loads(text) == RECEIPT_ITEMS
    assert models.last_kwargs["model"] == "gemini-2.5-flash"
    assert models.last_kwargs["config"].response_mime_type == "application/json"
    image_part, prompt = models.last_kwargs["contents"]
    assert prompt == "Scan"
    assert image_part.inline_data.data == b"receipt-bytes"
    assert image_part.inline_data.mime_type == "image/png"


def test_gemini_client_close_releases_async_session() -> None:
    client, _ = _gemini_client("[]")

    asyncio.run(client.close())

    assert client.client.aio.closed
