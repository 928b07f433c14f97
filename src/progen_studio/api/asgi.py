"""ASGI entrypoint for the image studio API."""

from progen_studio.api.app import create_app
from progen_studio.containers import build_container

app = create_app(build_container())
