"""API tests for recipe generation."""

import asyncio

import pytest
from sqlalchemy import select

from savebite.api.v1.recipe import ClientDisconnectedError, await_unless_disconnected
from savebite.models.food import FoodRecipe
from savebite.services.ai import RecipeProviderError


def _recipes(session):
    return session.scalars(select(FoodRecipe).order_by(FoodRecipe.id)).all()


class TestGenerateRecipe:

    def test_returns_and_stores_recipe(self, client, auth_headers, fake_provider, app_db):
        response = client.post("/recipe", json={"food_name": "Banana"}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"recipe": fake_provider.recipe}
        assert fake_provider.calls == ["Banana"]

        stored = _recipes(app_db)
        assert len(stored) == 1
        assert stored[0].recipe == fake_provider.recipe
        assert stored[0].food_id is None

    def test_links_recipe_to_food_by_name(self, client, auth_headers, app_db):
        food_id = client.post(
            "/foods", json={"name": "Spinach", "expiry_date": "2024-11-05"}, headers=auth_headers
        ).json()["id"]

        response = client.post("/recipe", json={"food_name": "spinach"}, headers=auth_headers)

        assert response.status_code == 200
        assert _recipes(app_db)[0].food_id == food_id

    def test_explicit_food_id_wins(self, client, auth_headers, app_db):
        client.post(
            "/foods", json={"name": "Spinach", "expiry_date": "2024-11-05"}, headers=auth_headers
        )

        response = client.post(
            "/recipe", json={"food_name": "Spinach", "food_id": 77}, headers=auth_headers
        )

        assert response.status_code == 200
        assert _recipes(app_db)[0].food_id == 77

    @pytest.mark.parametrize("body", [
        {},
        {"food_name": ""},
        {"food_name": "   "},
        {"food_name": "Milk", "food_id": 0},
        {"food_name": "Milk", "food_id": "abc"},
    ])
    def test_malformed_body(self, client, auth_headers, fake_provider, body):
        response = client.post("/recipe", json=body, headers=auth_headers)

        assert response.status_code == 400
        assert fake_provider.calls == []

    def test_provider_failure(self, client, auth_headers, fake_provider, app_db):
        fake_provider.error = RecipeProviderError("upstream exploded")

        response = client.post("/recipe", json={"food_name": "Milk"}, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to get recipe from AI"}
        assert _recipes(app_db) == []

    @pytest.mark.parametrize("text", ["", "  \n "])
    def test_empty_content(self, client, auth_headers, fake_provider, app_db, text):
        fake_provider.recipe = text

        response = client.post("/recipe", json={"food_name": "Milk"}, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "AI did not return a valid result"}
        assert _recipes(app_db) == []

    def test_provider_timeout(self, make_client, fake_provider, auth_headers_for):
        client = make_client(RECIPE_PROVIDER_TIMEOUT_SECONDS=0.05)
        fake_provider.delay = 5

        response = client.post(
            "/recipe", json={"food_name": "Milk"}, headers=auth_headers_for(client)
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to get recipe from AI"}

    def test_client_disconnect_cancels_provider(
            self, client, auth_headers, fake_provider, app_db, monkeypatch
    ):
        from starlette.requests import Request

        from savebite.api.v1 import recipe as recipe_api

        async def _gone(self):
            return True

        monkeypatch.setattr(Request, "is_disconnected", _gone)
        monkeypatch.setattr(recipe_api, "DISCONNECT_POLL_INTERVAL", 0.01)
        fake_provider.delay = 5

        response = client.post("/recipe", json={"food_name": "Milk"}, headers=auth_headers)

        assert response.status_code == 499
        assert response.json() == {"error": "Client closed request"}
        assert fake_provider.calls == ["Milk"]
        assert fake_provider.cancelled is True
        assert _recipes(app_db) == []

    def test_food_id_out_of_range(self, client, auth_headers, fake_provider):
        response = client.post(
            "/recipe",
            json={"food_name": "Milk", "food_id": 100000000000000000000},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert fake_provider.calls == []

    def test_missing_api_key_fails_only_the_request(self, make_client, auth_headers_for):
        client = make_client(override_provider=False, OPENAI_API_KEY=None)
        headers = auth_headers_for(client)

        response = client.post("/recipe", json={"food_name": "Milk"}, headers=headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Recipe service is not configured"}
        assert client.get("/health").status_code == 200
        assert client.get("/foods", headers=headers).status_code == 200

    def test_store_calls_run_in_threadpool(self, client, auth_headers, monkeypatch):
        from savebite.api.v1 import recipe as recipe_api

        offloaded = []
        real_run_in_threadpool = recipe_api.run_in_threadpool

        async def _recording(func, *args, **kwargs):
            offloaded.append(func.__name__)
            return await real_run_in_threadpool(func, *args, **kwargs)

        monkeypatch.setattr(recipe_api, "run_in_threadpool", _recording)
        response = client.post("/recipe", json={"food_name": "Milk"}, headers=auth_headers)

        assert response.status_code == 200
        assert offloaded == ["get_food_id_by_name", "create_food_recipe"]

    def test_store_failure(self, client, auth_headers, monkeypatch):
        from sqlalchemy.exc import OperationalError

        from savebite.crud import food as crud_food

        def _boom(db, food_id, recipe):
            raise OperationalError("INSERT", {}, Exception("read-only database"))

        monkeypatch.setattr(crud_food, "create_food_recipe", _boom)
        response = client.post("/recipe", json={"food_name": "Milk"}, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to save recipe to database"}


class _FakeRequest:

    def __init__(self, disconnected: bool):
        self.disconnected = disconnected
        self.checks = 0

    async def is_disconnected(self) -> bool:
        self.checks += 1
        return self.disconnected


class TestAwaitUnlessDisconnected:

    def test_returns_result(self):
        async def work():
            return "done"

        result = asyncio.run(
            await_unless_disconnected(_FakeRequest(False), work(), timeout=1)
        )
        assert result == "done"

    def test_propagates_errors(self):
        async def work():
            raise RecipeProviderError("nope")

        with pytest.raises(RecipeProviderError, match="nope"):
            asyncio.run(await_unless_disconnected(_FakeRequest(False), work(), timeout=1))

    def test_disconnect_cancels_work(self):
        cancelled = []

        async def work():
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.append(True)
                raise

        async def run():
            with pytest.raises(ClientDisconnectedError):
                await await_unless_disconnected(
                    _FakeRequest(True), work(), timeout=5, poll_interval=0.01
                )
            await asyncio.sleep(0)

        asyncio.run(run())
        assert cancelled == [True]

    def test_timeout_cancels_work(self):
        request = _FakeRequest(False)

        async def work():
            await asyncio.sleep(10)

        with pytest.raises(RecipeProviderError, match="timed out"):
            asyncio.run(
                await_unless_disconnected(request, work(), timeout=0.05, poll_interval=0.01)
            )
        assert request.checks >= 1
