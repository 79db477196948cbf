"""ASGI entrypoint for the LunaBloom API."""

from lunabloom.api.app import create_app
from lunabloom.containers import build_container

app = create_app(build_container())
