"""ASGI entrypoint for the time logger API."""

from time_logger.api.app import create_app
from time_logger.containers import build_container

app = create_app(build_container())
