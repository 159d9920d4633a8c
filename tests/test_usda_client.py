"""
Unit tests for the USDA FoodData Central client.

``requests.get`` is monkeypatched; no network access.
"""

import pytest
import requests

from app.nutrition import usda_client
from app.nutrition.usda_client import (
    FoodNotFoundError,
    NutritionConfigError,
    NutritionLookupError,
    UsdaClient,
    summarize_food,
)


BANANA_PAYLOAD = {
    "foods": [
        {
            "description": "Bananas, raw",
            "foodNutrients": [
                {"nutrientName": "Energy", "value": 89},
                {"nutrientName": "Protein", "value": 1.09},
                {"nutrientName": "Carbohydrate, by difference", "value": 22.8},
                {"nutrientName": "Total lipid (fat)", "value": 0.33},
                {"nutrientName": "Fiber, total dietary", "value": 2.6},
                {"nutrientName": "Potassium, K", "value": 358},
            ],
        },
        {"description": "Bananas, dehydrated", "foodNutrients": []},
    ]
}


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class TestSummarizeFood:

    def test_first_food_reshaped(self):
        result = summarize_food(BANANA_PAYLOAD)
        assert result.model_dump() == {
            "food": "Bananas, raw",
            "calories": 89,
            "protein": 1.09,
            "carbs": 22.8,
            "fats": 0.33,
            "fiber": 2.6,
        }

    def test_missing_nutrients_default_to_zero(self):
        payload = {"foods": [{"description": "Water", "foodNutrients": [{"nutrientName": "Energy", "value": 0}]}]}
        result = summarize_food(payload)
        assert result.calories == 0
        assert result.protein == 0
        assert result.fiber == 0

    def test_no_foods(self):
        with pytest.raises(FoodNotFoundError):
            summarize_food({"foods": []})
        with pytest.raises(FoodNotFoundError):
            summarize_food({})


class TestUsdaClient:

    def test_search_food_sends_query_and_key(self, monkeypatch):
        captured = {}

        def fake_get(url, params=None, timeout=None):
            captured.update(url=url, params=params, timeout=timeout)
            return FakeResponse(BANANA_PAYLOAD)

        monkeypatch.setattr(usda_client.requests, "get", fake_get)

        client = UsdaClient(api_key="test-key", base_url="https://fdc.example/search", timeout=3)
        result = client.search_food("banana")

        assert result.food == "Bananas, raw"
        assert captured["url"] == "https://fdc.example/search"
        assert captured["params"] == {"query": "banana", "api_key": "test-key"}
        assert captured["timeout"] == 3

    def test_missing_api_key(self, monkeypatch):
        def fail_get(*args, **kwargs):
            raise AssertionError("no request expected without an API key")

        monkeypatch.setattr(usda_client.requests, "get", fail_get)

        with pytest.raises(NutritionConfigError):
            UsdaClient(api_key="").search_food("banana")

    def test_http_error(self, monkeypatch):
        monkeypatch.setattr(
            usda_client.requests, "get", lambda *a, **kw: FakeResponse({}, status_code=503)
        )
        with pytest.raises(NutritionLookupError):
            UsdaClient(api_key="k").search_food("banana")

    def test_network_error(self, monkeypatch):
        def raise_timeout(*args, **kwargs):
            raise requests.Timeout("timed out")

        monkeypatch.setattr(usda_client.requests, "get", raise_timeout)
        with pytest.raises(NutritionLookupError):
            UsdaClient(api_key="k").search_food("banana")

    def test_invalid_json(self, monkeypatch):
        monkeypatch.setattr(usda_client.requests, "get", lambda *a, **kw: FakeResponse(None))
        with pytest.raises(NutritionLookupError):
            UsdaClient(api_key="k").search_food("banana")

    def test_not_found_is_lookup_error(self, monkeypatch):
        monkeypatch.setattr(usda_client.requests, "get", lambda *a, **kw: FakeResponse({"foods": []}))
        with pytest.raises(FoodNotFoundError):
            UsdaClient(api_key="k").search_food("zzzz")
        assert issubclass(FoodNotFoundError, NutritionLookupError)
