"""Image encoding for inline transport to the inference capability."""

import base64

from receipt_scanner.domain.receipts import EncodedImagePart, ImageResource

_DEFAULT_MIME_TYPE = "image/jpeg"


async def encode_image(image: ImageResource) -> EncodedImagePart:
    """Read the image and encode its bytes as base64 text."""
    content = await image.read()
    mime_type = image.media_type or detect_mime_type(content)
    encoded = base64.b64encode(content).decode("ascii")
    return EncodedImagePart(data=encoded, mime_type=mime_type)


def detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    if image_bytes[4:8] == b"ftyp" and image_bytes[8:12] in {b"heic", b"heix"}:
        return "image/heic"
    return _DEFAULT_MIME_TYPE
