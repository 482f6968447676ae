"""Vercel serverless function serving the recipe planner API.

The project is not installed on Vercel, so ``src`` is put on the import path
before the application module is loaded.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from recipe_planner.api.asgi import app  # noqa: E402

__all__ = ["app"]
