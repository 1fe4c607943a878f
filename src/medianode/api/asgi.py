"""ASGI entrypoint for the medianode dashboard API."""

from medianode.api.app import create_app
from medianode.containers import build_container

app = create_app(build_container())
