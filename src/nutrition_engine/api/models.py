"""Pydantic models for API request bodies."""

from pydantic import BaseModel, ConfigDict, Field

from nutrition_engine.domain.requests import FoodItem, NutritionTargets


class MealPlanRequest(BaseModel):
    """Meal plan request payload."""

    model_config = ConfigDict(populate_by_name=True)

    nutrition: NutritionTargets
    dietary_restrictions: str = Field(default="", alias="dietaryRestrictions")


class FoodAnalysisRequest(BaseModel):
    """Food analysis request payload."""

    model_config = ConfigDict(populate_by_name=True)

    food_items: list[FoodItem] = Field(alias="foodItems")
