"""Tests for the formula library."""

import pytest

from nutrition_engine.domain.errors import ComputationError
from nutrition_engine.domain.requests import BiometricInput
from nutrition_engine.services import formulas


def test_bmi_matches_definition_rounded_to_one_decimal() -> None:
    assert formulas.calculate_bmi(180, 80) == 24.7
    assert formulas.calculate_bmi(165.5, 61.2) == round(61.2 / 1.655**2, 1)


def test_bmi_is_scale_invariant_for_consistent_units() -> None:
    # Halving height and quartering weight keeps BMI unchanged.
    assert formulas.calculate_bmi(90, 20) == formulas.calculate_bmi(180, 80)


def test_bmi_rejects_non_positive_height() -> None:
    with pytest.raises(ComputationError):
        formulas.calculate_bmi(0, 80)


def test_bmr_mifflin_st_jeor() -> None:
    assert formulas.calculate_bmr("male", 30, 180, 80) == 1780
    assert formulas.calculate_bmr("female", 30, 180, 80) == 1614
    assert formulas.calculate_bmr("other", 30, 180, 80) == 1614


def test_bmr_rejects_non_positive_result() -> None:
    with pytest.raises(ComputationError):
        formulas.calculate_bmr("female", 120, 50, 10)


@pytest.mark.parametrize(
    ("level", "multiplier"),
    [
        ("sedentary", 1.2),
        ("light", 1.375),
        ("moderate", 1.55),
        ("active", 1.725),
        ("very-active", 1.9),
    ],
)
def test_tdee_multipliers(level: str, multiplier: float) -> None:
    assert formulas.calculate_tdee(1500, level) == pytest.approx(1500 * multiplier)


def test_tdee_unknown_activity_uses_sedentary() -> None:
    assert formulas.calculate_tdee(1780, "couch") == formulas.calculate_tdee(
        1780, "sedentary"
    )


def test_goal_adjustments() -> None:
    tdee = 2759.0
    assert formulas.adjust_calories_for_goal(tdee, "maintain") == tdee
    assert formulas.adjust_calories_for_goal(tdee, "general-health") == tdee
    assert formulas.adjust_calories_for_goal(tdee, "weight-loss") == tdee - 500
    assert formulas.adjust_calories_for_goal(tdee, "weight-gain") == tdee + 500
    assert formulas.adjust_calories_for_goal(tdee, "muscle-gain") == tdee + 300


def test_goal_adjustment_rejects_non_positive_calories() -> None:
    with pytest.raises(ComputationError):
        formulas.adjust_calories_for_goal(400, "weight-loss")


@pytest.mark.parametrize(
    ("weight_kg", "calories"),
    [(80, 2452.75), (55, 1600), (120, 3400.5), (10, 900)],
)
def test_macros_balance_calories(weight_kg: float, calories: float) -> None:
    macros = formulas.calculate_macros(weight_kg, calories)

    total = macros.protein_g * 4 + macros.carbs_g * 4 + macros.fats_g * 9
    rounded_total = (
        round(macros.protein_g) * 4
        + round(macros.carbs_g) * 4
        + round(macros.fats_g) * 9
    )

    assert total == pytest.approx(calories)
    assert abs(round(total) - round(calories)) <= 1
    # The ±1 bound holds for the rounded total above. Rounding each field on its
    # own can drift by up to 0.5 g per macro, 8.5 kcal in all.
    assert abs(rounded_total - calories) <= 9


def test_macros_split() -> None:
    macros = formulas.calculate_macros(80, 2452.75)

    assert macros.protein_g == pytest.approx(176)
    assert macros.fats_g == pytest.approx(68.13, abs=0.01)
    assert macros.carbs_g == pytest.approx(283.9, abs=0.05)


def test_macros_reject_protein_over_budget() -> None:
    with pytest.raises(ComputationError):
        formulas.calculate_macros(300, 1500)


@pytest.mark.parametrize(
    ("bmi", "label"),
    [(17.9, "Underweight"), (18.5, "Normal weight"), (27, "Overweight"), (30, "Obese")],
)
def test_bmi_category(bmi: float, label: str) -> None:
    assert formulas.bmi_category(bmi) == label


def test_reference_micronutrients_depend_on_sex_and_age() -> None:
    young_female = formulas.reference_micronutrients("female", 30, 2000)
    older_male = formulas.reference_micronutrients("male", 75, 2000)

    assert young_female["iron_mg"] == 18
    assert older_male["iron_mg"] == 8
    assert older_male["vitamin_d_mcg"] == 20
    assert young_female["fiber_g"] == 28


def test_compute_nutrition_scenario(biometrics: BiometricInput) -> None:
    result = formulas.compute_nutrition(biometrics)

    assert result.bmi == 24.7
    assert result.bmr == pytest.approx(1780)
    assert result.tdee == pytest.approx(2759)
    assert result.calories == pytest.approx(2259)
    assert result.protein_g == pytest.approx(176)
    assert result.fats_g == pytest.approx(62.75)
    assert result.carbs_g == pytest.approx(247.5625)
    assert result.bmi_category == "Normal weight"
    assert result.recommendations == (formulas.DEFAULT_RECOMMENDATION,)
    assert result.meal_suggestions == formulas.DEFAULT_MEAL_SUGGESTIONS
