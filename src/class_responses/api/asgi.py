"""ASGI entrypoint for the class responses API."""

from class_responses.api.app import create_app
from class_responses.containers import build_container

app = create_app(build_container())
