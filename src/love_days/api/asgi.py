"""ASGI entrypoint for the Love Days API."""

from love_days.api.app import create_app
from love_days.containers import build_container

app = create_app(build_container())
