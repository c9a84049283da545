"""Cleanup of wrapping artifacts around model JSON output."""

import re

_FENCED_BLOCK = re.compile(r"^```[\w-]*[ \t]*\r?\n?(?P<body>.*?)\r?\n?```$", re.DOTALL)
_FENCE_MARKER = re.compile(r"```(?:json\b)?", re.IGNORECASE)


def normalize_response(raw: str) -> str:
    """Strip surrounding code fences and whitespace from model output.

    Best-effort only: broken or truncated JSON is returned as-is for the
    validator to reject.
    """
    text = raw.strip()
    match = _FENCED_BLOCK.match(text)
    if match:
        return match.group("body").strip()
    if "```" in text:
        text = _FENCE_MARKER.sub("", text).strip()
    return text
