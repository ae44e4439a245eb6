"""ASGI entrypoint for the diet recipes API."""

from diet_recipes.api.app import create_app
from diet_recipes.containers import build_container

app = create_app(build_container())
