"""Natural-language query builders, one per enrichment question."""

import json
from collections.abc import Callable, Mapping

from nutrition_engine.domain.requests import BiometricInput, FoodItem

MEAL_SLOT_LABELS = {
    "breakfast": "breakfast",
    "lunch": "lunch",
    "dinner": "dinner",
    "snacks": "snack",
}


def format_quantity(value: float) -> str:
    """Render a number with at most two decimals and no trailing zeros."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in {"", "-0"} else text


def _body(biometrics: BiometricInput) -> str:
    return (
        f"{biometrics.gender} {biometrics.age} years "
        f"{format_quantity(biometrics.weight_kg)} kg "
        f"{format_quantity(biometrics.height_cm)} cm"
    )


def bmi_query(biometrics: BiometricInput) -> str:
    return (
        f"BMI for {format_quantity(biometrics.weight_kg)} kg and "
        f"{format_quantity(biometrics.height_cm)} cm"
    )


def bmr_query(biometrics: BiometricInput) -> str:
    return f"BMR calculation {_body(biometrics)}"


def tdee_query(biometrics: BiometricInput) -> str:
    return (
        f"TDEE calculation {_body(biometrics)} "
        f"{biometrics.activity_level} activity level"
    )


def calorie_query(biometrics: BiometricInput) -> str:
    return (
        f"daily calorie intake {_body(biometrics)} "
        f"{biometrics.activity_level} activity {biometrics.health_goal} goal"
    )


def protein_query(biometrics: BiometricInput) -> str:
    return (
        f"protein requirements {format_quantity(biometrics.weight_kg)} kg "
        f"body weight {biometrics.activity_level} activity"
    )


def carbs_query(biometrics: BiometricInput) -> str:
    return (
        f"carbohydrate requirements {format_quantity(biometrics.weight_kg)} kg "
        f"body weight {biometrics.activity_level} activity level"
    )


def fats_query(biometrics: BiometricInput) -> str:
    return (
        f"fat requirements {format_quantity(biometrics.weight_kg)} kg "
        f"body weight {biometrics.health_goal} goal"
    )


def nutrition_requirements_query(biometrics: BiometricInput) -> str:
    return (
        f"daily nutrition requirements {_body(biometrics)} "
        f"{biometrics.activity_level} activity {biometrics.health_goal} goal"
    )


def macro_distribution_query(biometrics: BiometricInput) -> str:
    return (
        f"macronutrient distribution {biometrics.health_goal} goal "
        f"{biometrics.activity_level} activity"
    )


def insights_query(biometrics: BiometricInput) -> str:
    return (
        f"health insights {biometrics.age} years {biometrics.gender} "
        f"{format_quantity(biometrics.weight_kg)} kg "
        f"{format_quantity(biometrics.height_cm)} cm "
        f"{biometrics.activity_level} activity {biometrics.health_goal} goal"
    )


def meal_query(slot: str, calories: float, dietary_restrictions: str = "") -> str:
    label = MEAL_SLOT_LABELS[slot]
    query = f"healthy {label} ideas {format_quantity(calories)} calories"
    restrictions = dietary_restrictions.strip()
    return f"{query} {restrictions}" if restrictions else query


def food_query(item: FoodItem) -> str:
    return f"nutrition facts {item.name} {item.quantity}"


def nutrition_chart_query(
    calories: float, protein_g: float, carbs_g: float, fats_g: float
) -> str:
    return (
        f"nutrition chart {format_quantity(calories)} calories "
        f"{format_quantity(protein_g)}g protein {format_quantity(carbs_g)}g carbs "
        f"{format_quantity(fats_g)}g fats"
    )


def progress_chart_query(weight_kg: float) -> str:
    return f"progress chart weight {format_quantity(weight_kg)} kg over time"


def generic_chart_query(data: Mapping[str, object]) -> str:
    return f"health data visualization {json.dumps(data, sort_keys=True, default=str)}"


METRIC_QUERIES: dict[str, Callable[[BiometricInput], str]] = {
    "bmi": bmi_query,
    "bmr": bmr_query,
    "tdee": tdee_query,
    "calories": calorie_query,
    "protein_g": protein_query,
    "carbs_g": carbs_query,
    "fats_g": fats_query,
}
