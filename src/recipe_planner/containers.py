"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from recipe_planner.adapters.kv_repositories import (
    KeyValueFavoritesRepository,
    KeyValueMealPlanRepository,
    KeyValueShoppingListRepository,
)
from recipe_planner.adapters.mealdb_client import HttpxMealDbClient
from recipe_planner.adapters.openrouter_client import OpenRouterCompletionClient
from recipe_planner.adapters.spoonacular_client import HttpxSpoonacularClient
from recipe_planner.adapters.supabase_kv_store import SupabaseKeyValueStore
from recipe_planner.config import Settings
from recipe_planner.services.cache import InMemoryCache
from recipe_planner.services.favorites import FavoritesService
from recipe_planner.services.meal_plans import MealPlanService
from recipe_planner.services.recipes import RecipeService
from recipe_planner.services.shopping import ShoppingListService
from recipe_planner.services.storage import InMemoryKeyValueStore, KeyValueStore
from recipe_planner.services.suggestions import SuggestionService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: KeyValueStore
    meal_plan_service: MealPlanService
    shopping_list_service: ShoppingListService
    favorites_service: FavoritesService
    recipe_service: RecipeService
    suggestion_service: SuggestionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store = _build_store(resolved_settings)
    namespace = resolved_settings.storage_namespace

    spoonacular_client = (
        HttpxSpoonacularClient.create(
            api_key=resolved_settings.spoonacular_api_key,
            base_url=resolved_settings.spoonacular_base_url,
        )
        if resolved_settings.spoonacular_api_key
        else None
    )
    mealdb_client = HttpxMealDbClient.create(resolved_settings.mealdb_base_url)
    completion_client = (
        OpenRouterCompletionClient.create(
            api_key=resolved_settings.openrouter_api_key,
            base_url=resolved_settings.openrouter_base_url,
            model=resolved_settings.openrouter_model,
            referer=resolved_settings.openrouter_referer,
            title=resolved_settings.openrouter_title,
        )
        if resolved_settings.openrouter_api_key
        else None
    )

    async def close_resources() -> None:
        if spoonacular_client is not None:
            await spoonacular_client.close()
        await mealdb_client.close()
        if completion_client is not None:
            await completion_client.close()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        meal_plan_service=MealPlanService(
            KeyValueMealPlanRepository(store, namespace)
        ),
        shopping_list_service=ShoppingListService(
            KeyValueShoppingListRepository(store, namespace)
        ),
        favorites_service=FavoritesService(
            KeyValueFavoritesRepository(store, namespace)
        ),
        recipe_service=RecipeService(
            primary=spoonacular_client,
            fallback=mealdb_client,
            cache=InMemoryCache(),
        ),
        suggestion_service=SuggestionService(completion_client),
        close_resources=close_resources,
    )


def _build_store(settings: Settings) -> KeyValueStore:
    if settings.uses_supabase:
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client, table=settings.supabase_table)
    _logger.warning("Supabase is not configured, using in-memory storage")
    return InMemoryKeyValueStore()
