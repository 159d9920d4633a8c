"""USDA FoodData Central client.

Looks a food up by name and reshapes the first search hit into a
six-field nutrition summary.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests
from pydantic import BaseModel, ConfigDict, Field

from app import config

logger = logging.getLogger(__name__)

# USDA nutrient names -> response fields
NUTRIENT_FIELDS = {
    "calories": "Energy",
    "protein": "Protein",
    "carbs": "Carbohydrate, by difference",
    "fats": "Total lipid (fat)",
    "fiber": "Fiber, total dietary",
}


class NutritionLookupError(Exception):
    """Raised when the nutrition database cannot be queried."""
    pass


class NutritionConfigError(NutritionLookupError):
    """Raised when no USDA API key is configured."""
    pass


class FoodNotFoundError(NutritionLookupError):
    """Raised when a search returns no foods."""
    pass


class FoodNutrition(BaseModel):
    """Nutrition summary for the best matching food."""
    food: str = Field(..., description="USDA food description")
    calories: float = Field(0, description="Energy (kcal)")
    protein: float = Field(0, description="Protein (g)")
    carbs: float = Field(0, description="Carbohydrate, by difference (g)")
    fats: float = Field(0, description="Total lipid (g)")
    fiber: float = Field(0, description="Total dietary fiber (g)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "food": "Bananas, raw",
                "calories": 89,
                "protein": 1.09,
                "carbs": 22.8,
                "fats": 0.33,
                "fiber": 2.6,
            }
        }
    )


def summarize_food(payload: Dict[str, Any]) -> FoodNutrition:
    """Reshape a FoodData Central search payload.

    Args:
        payload: Decoded JSON from /foods/search

    Returns:
        FoodNutrition for the first food; missing nutrients default to 0

    Raises:
        FoodNotFoundError: If the payload lists no foods
    """
    foods = (payload or {}).get("foods") or []
    if not foods:
        raise FoodNotFoundError("Food not found")

    food = foods[0]
    nutrients: Dict[str, Any] = {}
    for nutrient in food.get("foodNutrients") or []:
        name = nutrient.get("nutrientName")
        if name:
            nutrients[name] = nutrient.get("value")

    values = {field: nutrients.get(usda_name) or 0 for field, usda_name in NUTRIENT_FIELDS.items()}
    return FoodNutrition(food=food.get("description") or "", **values)


class UsdaClient:
    """Thin requests-based client for the FoodData Central search endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else config.USDA_API_KEY
        self.base_url = base_url or config.USDA_API_URL
        self.timeout = timeout if timeout is not None else config.USDA_TIMEOUT_SECONDS

    def search_food(self, food_name: str) -> FoodNutrition:
        """Search FoodData Central and summarize the first hit.

        Raises:
            NutritionConfigError: If no API key is configured
            FoodNotFoundError: If nothing matches
            NutritionLookupError: On HTTP, network or JSON errors
        """
        if not self.api_key:
            raise NutritionConfigError("USDA API key missing")

        logger.info(f"Querying USDA FoodData Central for: {food_name}")
        try:
            response = requests.get(
                self.base_url,
                params={"query": food_name, "api_key": self.api_key},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise NutritionLookupError(f"USDA request failed: {e}") from e
        except ValueError as e:
            raise NutritionLookupError(f"USDA returned invalid JSON: {e}") from e

        return summarize_food(payload)
