"""Tests for recipe search and AI suggestion endpoints."""

import json

import httpx
from fastapi.testclient import TestClient
from openai import APIStatusError

from recipe_planner.api.app import create_app
from recipe_planner.services.suggestions import SuggestionService
from tests.conftest import FakeCompletionClient, FakeRecipeClient


def _status_error(status_code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://api.spoonacular.com/recipes/1")
    return httpx.HTTPStatusError(
        "error",
        request=request,
        response=httpx.Response(status_code, request=request),
    )


def test_recipe_search_and_details(container) -> None:
    client = TestClient(create_app(container))

    search = client.get("/recipes/search", params={"query": "pasta", "type": "main"})
    details = client.get("/recipes/5")
    random = client.get("/recipes/random", params={"count": 2})

    assert search.json()["results"][0]["title"] == "Spaghetti"
    assert search.json()["totalResults"] == 1
    assert details.json()["id"] == 5
    assert details.json()["nutrition"]["nutrients"][0]["name"] == "Calories"
    assert len(random.json()["recipes"]) == 2


def test_recipe_errors(container, recipe_client: FakeRecipeClient) -> None:
    client = TestClient(create_app(container))

    recipe_client.error = _status_error(404)
    assert client.get("/recipes/9").status_code == 404

    recipe_client.error = _status_error(500)
    assert client.get("/recipes/10").status_code == 502
    assert client.get("/recipes/random").status_code == 502
    assert client.get("/recipes/random", params={"count": 0}).status_code == 422


def test_recommendations_fall_back_without_reply(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/ai/recommendations", json={"count": 2})

    recommendations = response.json()["recommendations"]
    assert [entry["title"] for entry in recommendations] == [
        "Quick Vegetable Stir Fry",
        "Classic Pasta with Marinara",
    ]
    assert recommendations[0]["cookingTime"] == 15


def test_plan_recommendation(container) -> None:
    client = TestClient(create_app(container))
    body = {
        "suggestion": {"title": "Lemon Chicken", "ingredients": ["chicken", "lemon"]},
        "date": "2024-01-15",
        "mealType": "lunch",
        "servings": 2,
    }

    response = client.post("/ai/recommendations/plan", json=body)

    assert response.status_code == 201
    payload = response.json()
    assert payload["recipe"]["id"] < 0
    assert payload["recipe"]["title"] == "Lemon Chicken"
    assert len(payload["recipe"]["extendedIngredients"]) == 2
    assert container.meal_plan_service.get(payload["id"]).servings == 2


def test_meal_plan_suggestion_text(
    container, completion_client: FakeCompletionClient
) -> None:
    completion_client.reply = json.dumps(
        {"mealPlan": "Day 1: Soup", "explanation": "Light and warm."}
    )
    client = TestClient(create_app(container))

    response = client.post("/ai/meal-plan", json={"days": 1})

    data = response.json()
    assert data["mealPlan"] == "Day 1: Soup"
    assert data["text"].startswith("1-Day AI Meal Plan\n\nDay 1: Soup")


def test_modify_and_shopping_optimization(container) -> None:
    client = TestClient(create_app(container))

    modified = client.post(
        "/ai/modify",
        json={"recipe": {"id": 1, "title": "Chili"}, "modifications": ["vegan"]},
    )
    optimized = client.post(
        "/ai/shopping-optimization",
        json={"ingredients": ["eggs", "milk"], "storeType": "bulk"},
    )

    assert modified.json()["modifiedRecipe"].startswith("Modified Chili")
    assert optimized.json()["optimizedList"] == "eggs\n- milk"
    invalid = client.post("/ai/modify", json={"recipe": {}, "modifications": ["x"]})
    assert invalid.status_code == 400


def test_openrouter_proxy(container, completion_client: FakeCompletionClient) -> None:
    completion_client.reply = "Try a frittata."
    client = TestClient(create_app(container))

    response = client.post("/ai/openrouter", json={"prompt": "Dinner idea?"})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": {"content": "Try a frittata."},
        "error": None,
    }
    assert completion_client.calls == [("Dinner idea?", 0.8, 2000)]


def test_openrouter_proxy_errors(
    container, completion_client: FakeCompletionClient
) -> None:
    client = TestClient(create_app(container))

    missing = client.post("/ai/openrouter", json={})
    assert missing.status_code == 400
    assert missing.json()["error"] == "Missing prompt"

    not_allowed = client.get("/ai/openrouter")
    assert not_allowed.status_code == 405
    assert not_allowed.json()["success"] is False

    request = httpx.Request("POST", "https://openrouter.ai/api/v1/chat/completions")
    completion_client.error = APIStatusError(
        "Rate limited", response=httpx.Response(429, request=request), body=None
    )
    limited = client.post("/ai/openrouter", json={"prompt": "hi"})
    assert limited.status_code == 429
    assert limited.json()["error"] == "Rate limited"

    container.suggestion_service = SuggestionService(None)
    unconfigured = client.post("/ai/openrouter", json={"prompt": "hi"})
    assert unconfigured.status_code == 500
    assert unconfigured.json()["error"] == "OpenRouter API key not configured"
