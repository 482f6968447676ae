"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recipe_planner.api.favorites import router as favorites_router
from recipe_planner.api.meal_plans import router as meal_plans_router
from recipe_planner.api.nutrition import router as nutrition_router
from recipe_planner.api.recipes import router as recipes_router
from recipe_planner.api.shopping_lists import router as shopping_lists_router
from recipe_planner.api.suggestions import router as suggestions_router
from recipe_planner.app_logging import configure_logging
from recipe_planner.config import parse_allowed_origins
from recipe_planner.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Starting recipe planner (environment=%s, storage=%s)",
            container.settings.environment,
            "supabase" if container.settings.uses_supabase else "memory",
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    allowed_origins = parse_allowed_origins(container.settings.allowed_origins)
    if allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allowed_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(meal_plans_router)
    app.include_router(shopping_lists_router)
    app.include_router(nutrition_router)
    app.include_router(favorites_router)
    app.include_router(recipes_router)
    app.include_router(suggestions_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
