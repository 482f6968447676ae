"""ASGI entrypoint, e.g. ``uvicorn recipe_planner.api.asgi:app``."""

from recipe_planner.api.app import create_app
from recipe_planner.config import Settings
from recipe_planner.containers import build_container

settings = Settings()
app = create_app(build_container(settings))
