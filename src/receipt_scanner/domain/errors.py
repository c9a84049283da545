"""Error taxonomy for receipt extraction."""


class ReceiptScanError(Exception):
    """Base class for classified receipt scan failures."""

    code = "scan_failed"
    user_message = "Error scanning receipt. Please try a clearer image."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.user_message)


class InputError(ReceiptScanError):
    """No image was supplied, or the resource is not an image."""

    code = "invalid_input"
    user_message = "Please select or drop a receipt image first."


class ConfigurationError(ReceiptScanError):
    """The inference capability is not usable, e.g. a missing credential."""

    code = "not_configured"
    user_message = "Receipt scanning is not configured."


class InferenceError(ReceiptScanError):
    """The inference capability call failed or timed out."""

    code = "inference_failed"
    user_message = "Receipt analysis failed. Please try again."


class MalformedOutputError(ReceiptScanError):
    """The capability responded, but its output failed validation."""

    code = "malformed_output"
    user_message = "AI analysis failed to produce structured data."

    def __init__(self, message: str | None = None, raw_text: str | None = None) -> None:
        super().__init__(message)
        self.raw_text = raw_text


class UnsupportedMediaError(InputError):
    """The supplied resource is not an image type."""

    code = "unsupported_media_type"
    user_message = "Please drop a valid image file."
