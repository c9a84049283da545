"""ASGI entrypoint for the receipt scanner API."""

from receipt_scanner.api.app import create_app
from receipt_scanner.containers import build_container

app = create_app(build_container())
