"""Formula library for energy and macronutrient targets.

Every function is pure and assumes validated input. Invariants that cannot
hold for a given input (for example a non-positive BMR) raise
``ComputationError``.
"""

from nutrition_engine.domain.errors import ComputationError
from nutrition_engine.domain.nutrition import (
    MacroTargets,
    MealSuggestions,
    NutritionResult,
)
from nutrition_engine.domain.requests import BiometricInput

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very-active": 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = ACTIVITY_MULTIPLIERS["sedentary"]

GOAL_ADJUSTMENTS: dict[str, float] = {
    "weight-loss": -500.0,
    "weight-gain": 500.0,
    "muscle-gain": 300.0,
    "maintain": 0.0,
    "general-health": 0.0,
}

PROTEIN_G_PER_KG = 2.2
FAT_CALORIE_SHARE = 0.25
KCAL_PER_G_PROTEIN = 4.0
KCAL_PER_G_CARBS = 4.0
KCAL_PER_G_FAT = 9.0

DEFAULT_RECOMMENDATION = "Maintain a balanced diet with regular exercise"
DEFAULT_MEAL_SUGGESTIONS = MealSuggestions(
    breakfast=("Oatmeal with berries and nuts",),
    lunch=("Grilled chicken salad with quinoa",),
    dinner=("Salmon with roasted vegetables",),
    snacks=("Greek yogurt with almonds",),
)


def calculate_bmi(height_cm: float, weight_kg: float) -> float:
    """Body mass index rounded to one decimal."""
    if height_cm <= 0:
        raise ComputationError(f"Height must be positive, got {height_cm}")
    height_m = height_cm / 100
    return round(weight_kg / height_m**2, 1)


def calculate_bmr(
    gender: str, age_years: float, height_cm: float, weight_kg: float
) -> float:
    """Basal metabolic rate using the Mifflin-St Jeor equation.

    ``female`` and ``other`` share the female constant.
    """
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age_years
    bmr = base + 5 if gender == "male" else base - 161
    if bmr <= 0:
        raise ComputationError(
            f"BMR must be positive, got {bmr:.2f} for the given measurements"
        )
    return bmr


def calculate_tdee(bmr: float, activity_level: str) -> float:
    """Total daily energy expenditure.

    Unknown activity levels use the sedentary multiplier.
    """
    multiplier = ACTIVITY_MULTIPLIERS.get(activity_level, DEFAULT_ACTIVITY_MULTIPLIER)
    return bmr * multiplier


def adjust_calories_for_goal(tdee: float, goal: str) -> float:
    """Shift TDEE by the calorie offset of a health goal."""
    calories = tdee + GOAL_ADJUSTMENTS.get(goal, 0.0)
    if calories <= 0:
        raise ComputationError(f"Calorie target must be positive, got {calories:.2f}")
    return calories


def calculate_macros(weight_kg: float, calories: float) -> MacroTargets:
    """Split calories into protein, fat and the carbohydrate remainder."""
    protein_g = weight_kg * PROTEIN_G_PER_KG
    fats_g = calories * FAT_CALORIE_SHARE / KCAL_PER_G_FAT
    remaining = calories - protein_g * KCAL_PER_G_PROTEIN - fats_g * KCAL_PER_G_FAT
    if remaining < 0:
        raise ComputationError(
            f"Protein target of {protein_g:.0f} g exceeds the "
            f"{calories:.0f} kcal budget"
        )
    return MacroTargets(
        protein_g=protein_g,
        carbs_g=remaining / KCAL_PER_G_CARBS,
        fats_g=fats_g,
    )


def bmi_category(bmi: float) -> str:
    """Return the WHO label for a BMI value."""
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal weight"
    if bmi < 30:
        return "Overweight"
    return "Obese"


def reference_micronutrients(
    gender: str, age_years: float, calories: float
) -> dict[str, float]:
    """Daily reference intakes for key micronutrients."""
    male = gender == "male"
    over50 = age_years >= 50
    over70 = age_years > 70
    return {
        "sodium_mg": 2300.0,
        "potassium_mg": 3400.0 if male else 2600.0,
        "magnesium_mg": 420.0 if male else 320.0,
        "calcium_mg": 1200.0 if over70 or (over50 and not male) else 1000.0,
        "iron_mg": 8.0 if male or over50 else 18.0,
        "folate_mcg": 400.0,
        "vitamin_b12_mcg": 2.4,
        "vitamin_c_mg": 90.0 if male else 75.0,
        "vitamin_d_mcg": 20.0 if over70 else 15.0,
        "fiber_g": round(14 * calories / 1000, 1),
        "added_sugar_g": round(0.10 * calories / 4, 1),
    }


def compute_nutrition(biometrics: BiometricInput) -> NutritionResult:
    """Formula-only nutrition result for validated biometrics."""
    bmi = calculate_bmi(biometrics.height_cm, biometrics.weight_kg)
    bmr = calculate_bmr(
        biometrics.gender, biometrics.age, biometrics.height_cm, biometrics.weight_kg
    )
    tdee = calculate_tdee(bmr, biometrics.activity_level)
    calories = adjust_calories_for_goal(tdee, biometrics.health_goal)
    macros = calculate_macros(biometrics.weight_kg, calories)
    return NutritionResult(
        bmi=bmi,
        bmr=bmr,
        tdee=tdee,
        calories=calories,
        protein_g=macros.protein_g,
        carbs_g=macros.carbs_g,
        fats_g=macros.fats_g,
        recommendations=(DEFAULT_RECOMMENDATION,),
        meal_suggestions=DEFAULT_MEAL_SUGGESTIONS,
        micronutrients=reference_micronutrients(
            biometrics.gender, biometrics.age, calories
        ),
        bmi_category=bmi_category(bmi),
    )
