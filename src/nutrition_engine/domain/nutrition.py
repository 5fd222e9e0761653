"""Nutrition result models."""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class MacroTargets:
    """Daily macronutrient targets in grams."""

    protein_g: float
    carbs_g: float
    fats_g: float


@dataclass(frozen=True)
class MealSuggestions:
    """Suggestions per meal slot."""

    breakfast: tuple[str, ...]
    lunch: tuple[str, ...]
    dinner: tuple[str, ...]
    snacks: tuple[str, ...]


@dataclass(frozen=True)
class NutritionResult:
    """Derived metrics and targets for one assessment.

    Each field comes from enrichment or the formula path independently, so
    ``4 * protein_g + 4 * carbs_g + 9 * fats_g`` matches ``calories`` only when
    the calorie target and all three macros share a source.
    """

    bmi: float
    bmr: float
    tdee: float
    calories: float
    protein_g: float
    carbs_g: float
    fats_g: float
    recommendations: tuple[str, ...]
    meal_suggestions: MealSuggestions
    micronutrients: Mapping[str, float] = field(default_factory=dict)
    bmi_category: str = ""

    @property
    def macros(self) -> MacroTargets:
        """Macronutrient targets of this result."""
        return MacroTargets(
            protein_g=self.protein_g, carbs_g=self.carbs_g, fats_g=self.fats_g
        )


@dataclass(frozen=True)
class FoodAnalysisItem:
    """Nutrition text for a single food item."""

    food: str
    quantity: str
    nutrition: str


@dataclass(frozen=True)
class FoodAnalysis:
    """Analysis of a batch of food items, in input order."""

    analyses: tuple[FoodAnalysisItem, ...]
    total_nutrition: str


@dataclass(frozen=True)
class MealPlan:
    """Daily meal plan built from calorie targets."""

    meals: MealSuggestions
    slot_calories: Mapping[str, float]
    total_calories: float
    macronutrients: MacroTargets


@dataclass(frozen=True)
class HealthInsights:
    """Insights and generic recommendations for a user."""

    insights: tuple[str, ...]
    recommendations: tuple[str, ...]


@dataclass(frozen=True)
class ChartData:
    """Chart descriptor text plus the numeric series it describes."""

    type: str
    chart_data: str
    series: Mapping[str, float]
    timestamp: str
