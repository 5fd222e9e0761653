"""Nutrition engine orchestrating enrichment with formula fallback."""

import asyncio
import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from nutrition_engine.domain.errors import ValidationError
from nutrition_engine.domain.nutrition import (
    ChartData,
    FoodAnalysis,
    FoodAnalysisItem,
    HealthInsights,
    MacroTargets,
    MealPlan,
    MealSuggestions,
    NutritionResult,
)
from nutrition_engine.domain.requests import (
    BiometricInput,
    ChartRequest,
    FoodItem,
    NutritionTargets,
    parse_model,
)
from nutrition_engine.services import formulas, queries
from nutrition_engine.services.enrichment import EnrichmentService
from nutrition_engine.services.strategies import (
    METRICS,
    FallbackSelector,
    FormulaStrategy,
    Metric,
    MetricStrategy,
    RemoteStrategy,
    TextSelector,
)

MEAL_SPLIT: dict[str, float] = {
    "breakfast": 0.25,
    "lunch": 0.35,
    "dinner": 0.30,
    "snacks": 0.10,
}

DEFAULT_MACRO_TEXT = "Balanced macronutrient distribution"
DEFAULT_INSIGHT = "Maintain a balanced diet and regular exercise"
PROFESSIONAL_ADVICE = "Consult with a healthcare professional for personalized advice"
FOOD_UNAVAILABLE = "Nutrition information not available"
TOTAL_AVAILABLE = "Combined nutrition analysis available"
TOTAL_UNAVAILABLE = "Analysis temporarily unavailable"
CHART_UNAVAILABLE = "Chart generation temporarily unavailable"

_ASSESSMENT_METRICS: frozenset[Metric] = frozenset(
    {"bmi", "bmr", "tdee", "calories"}
)
_REQUIREMENT_METRICS: frozenset[Metric] = frozenset(
    {"protein_g", "carbs_g", "fats_g"}
)

_logger = logging.getLogger(__name__)


@dataclass
class NutritionEngine:
    """Entry points for the six nutrition request kinds."""

    metrics: MetricStrategy
    text: TextSelector

    @classmethod
    def create(cls, enrichment: EnrichmentService) -> "NutritionEngine":
        """Compose the remote and formula strategies around an enrichment service."""
        return cls(
            metrics=FallbackSelector(
                primary=RemoteStrategy(enrichment), fallback=FormulaStrategy()
            ),
            text=TextSelector(enrichment),
        )

    async def process_health_data(
        self, biometrics: BiometricInput | Mapping[str, object]
    ) -> NutritionResult:
        """Assess biometrics: enriched BMI, BMR, TDEE and calorie target.

        Protein, carbohydrate and fat stay on the formula calorie target while
        micronutrients follow the returned calories, so an enriched calorie
        value need not equal the macro energy total.
        """
        resolved = parse_model(BiometricInput, biometrics)
        return await self._nutrition_result(
            resolved,
            enriched=_ASSESSMENT_METRICS,
            text_query=queries.nutrition_requirements_query(resolved),
            default_text=formulas.DEFAULT_RECOMMENDATION,
        )

    async def calculate_nutrition(
        self, biometrics: BiometricInput | Mapping[str, object]
    ) -> NutritionResult:
        """Nutrition requirements: enriched protein, carbohydrate and fat targets."""
        resolved = parse_model(BiometricInput, biometrics)
        return await self._nutrition_result(
            resolved,
            enriched=_REQUIREMENT_METRICS,
            text_query=queries.macro_distribution_query(resolved),
            default_text=DEFAULT_MACRO_TEXT,
        )

    async def generate_meal_plan(
        self,
        nutrition: NutritionResult | NutritionTargets | Mapping[str, object],
        dietary_restrictions: str = "",
    ) -> MealPlan:
        """Split the daily calories across meal slots and suggest meals per slot."""
        if not isinstance(nutrition, NutritionResult):
            nutrition = parse_model(NutritionTargets, nutrition)
        slot_calories = {
            slot: nutrition.calories * share for slot, share in MEAL_SPLIT.items()
        }
        answers = await asyncio.gather(
            *(
                self.text.fetch(
                    queries.meal_query(slot, calories, dietary_restrictions)
                )
                for slot, calories in slot_calories.items()
            )
        )
        suggestions = {
            slot: (answer,)
            if answer
            else getattr(formulas.DEFAULT_MEAL_SUGGESTIONS, slot)
            for slot, answer in zip(slot_calories, answers, strict=True)
        }
        return MealPlan(
            meals=MealSuggestions(**suggestions),
            slot_calories=slot_calories,
            total_calories=nutrition.calories,
            macronutrients=MacroTargets(
                protein_g=nutrition.protein_g,
                carbs_g=nutrition.carbs_g,
                fats_g=nutrition.fats_g,
            ),
        )

    async def analyze_food(
        self, items: Sequence[FoodItem | Mapping[str, object]]
    ) -> FoodAnalysis:
        """Look up nutrition text for each food item, preserving input order."""
        foods = _parse_food_items(items)
        answers = await asyncio.gather(
            *(self.text.fetch(queries.food_query(food)) for food in foods)
        )
        analyses = tuple(
            FoodAnalysisItem(
                food=food.name,
                quantity=food.quantity,
                nutrition=answer or FOOD_UNAVAILABLE,
            )
            for food, answer in zip(foods, answers, strict=True)
        )
        available = any(answers)
        if not available:
            _logger.info("Food analysis unavailable for %s items", len(foods))
        return FoodAnalysis(
            analyses=analyses,
            total_nutrition=TOTAL_AVAILABLE if available else TOTAL_UNAVAILABLE,
        )

    async def get_health_insights(
        self, biometrics: BiometricInput | Mapping[str, object]
    ) -> HealthInsights:
        """Return a single enriched insight or the generic default."""
        resolved = parse_model(BiometricInput, biometrics)
        insight = await self.text.resolve(
            queries.insights_query(resolved), DEFAULT_INSIGHT
        )
        return HealthInsights(
            insights=(insight,), recommendations=(PROFESSIONAL_ADVICE,)
        )

    async def generate_chart_data(
        self, request: ChartRequest | Mapping[str, object]
    ) -> ChartData:
        """Describe a chart and return the numeric series behind it."""
        chart = parse_model(ChartRequest, request)
        query, series = _chart_query(chart)
        text = await self.text.resolve(query, CHART_UNAVAILABLE)
        return ChartData(
            type=chart.type,
            chart_data=text,
            series=series,
            timestamp=datetime.now(tz=UTC).isoformat(),
        )

    async def _nutrition_result(
        self,
        biometrics: BiometricInput,
        *,
        enriched: Iterable[Metric],
        text_query: str,
        default_text: str,
    ) -> NutritionResult:
        wanted = frozenset(enriched)
        # Raises ComputationError before any query is in flight.
        baseline = formulas.compute_nutrition(biometrics)
        async with asyncio.TaskGroup() as group:
            tasks = {
                metric: group.create_task(self.metrics.resolve(metric, biometrics))
                for metric in METRICS
                if metric in wanted
            }
            recommendation = group.create_task(
                self.text.resolve(text_query, default_text)
            )
        resolved: dict[Metric, float] = {
            metric: (
                tasks[metric].result() if metric in tasks else getattr(baseline, metric)
            )
            for metric in METRICS
        }
        return NutritionResult(
            bmi=resolved["bmi"],
            bmr=resolved["bmr"],
            tdee=resolved["tdee"],
            calories=resolved["calories"],
            protein_g=resolved["protein_g"],
            carbs_g=resolved["carbs_g"],
            fats_g=resolved["fats_g"],
            recommendations=(recommendation.result(),),
            meal_suggestions=formulas.DEFAULT_MEAL_SUGGESTIONS,
            micronutrients=formulas.reference_micronutrients(
                biometrics.gender, biometrics.age, resolved["calories"]
            ),
            bmi_category=formulas.bmi_category(resolved["bmi"]),
        )


def _parse_food_items(
    items: Sequence[FoodItem | Mapping[str, object]],
) -> list[FoodItem]:
    """Validate food items, reporting problems with their position."""
    if not items:
        raise ValidationError(["foodItems: at least one food item is required"])
    foods: list[FoodItem] = []
    details: list[str] = []
    for index, item in enumerate(items):
        try:
            foods.append(parse_model(FoodItem, item))
        except ValidationError as exc:
            details.extend(f"foodItems.{index}.{detail}" for detail in exc.details)
    if details:
        raise ValidationError(details)
    return foods


def _chart_query(chart: ChartRequest) -> tuple[str, dict[str, float]]:
    """Build the chart query and its series, validating required data keys."""
    if chart.type == "nutrition":
        calories, protein, carbs, fats = _require_numbers(
            chart.data, ("calories", "protein", "carbs", "fats")
        )
        series = {
            "protein": protein * formulas.KCAL_PER_G_PROTEIN,
            "carbs": carbs * formulas.KCAL_PER_G_CARBS,
            "fats": fats * formulas.KCAL_PER_G_FAT,
        }
        return queries.nutrition_chart_query(calories, protein, carbs, fats), series
    if chart.type == "progress":
        (weight,) = _require_numbers(chart.data, ("weight",))
        return queries.progress_chart_query(weight), {"weight": weight}
    return queries.generic_chart_query(chart.data), {}


def _require_numbers(data: Mapping[str, object], keys: Sequence[str]) -> list[float]:
    values: list[float] = []
    missing: list[str] = []
    for key in keys:
        value = data.get(key)
        if isinstance(value, bool) or not isinstance(value, int | float):
            missing.append(f"data.{key}: a number is required")
            continue
        values.append(float(value))
    if missing:
        raise ValidationError(missing)
    return values

