"""ASGI entrypoint for the nutrient tracker API."""

from nutrient_tracker.api.app import create_app
from nutrient_tracker.containers import build_container

app = create_app(build_container())
