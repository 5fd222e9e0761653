"""Validated inputs accepted by the nutrition engine."""

from typing import Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from nutrition_engine.domain.errors import ValidationError

Gender = Literal["male", "female", "other"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very-active"]
HealthGoal = Literal[
    "weight-loss", "weight-gain", "maintain", "muscle-gain", "general-health"
]

DEFAULT_QUANTITY = "1 serving"

ModelT = TypeVar("ModelT", bound=BaseModel)


class BiometricInput(BaseModel):
    """Biometric data submitted for an assessment."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    age: int = Field(ge=1, le=120)
    gender: Gender
    height_cm: float = Field(ge=50, le=300, alias="heightCm")
    weight_kg: float = Field(ge=10, le=500, alias="weightKg")
    activity_level: ActivityLevel = Field(alias="activityLevel")
    health_goal: HealthGoal = Field(alias="healthGoal")
    dietary_restrictions: str = Field(default="", alias="dietaryRestrictions")


class NutritionTargets(BaseModel):
    """Daily calorie and macro targets used to build a meal plan."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    calories: float = Field(gt=0)
    protein_g: float = Field(default=0.0, ge=0, alias="protein")
    carbs_g: float = Field(default=0.0, ge=0, alias="carbs")
    fats_g: float = Field(default=0.0, ge=0, alias="fats")


class FoodItem(BaseModel):
    """A single food to analyze."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(min_length=1)
    quantity: str = DEFAULT_QUANTITY

    @field_validator("quantity", mode="before")
    @classmethod
    def _default_blank_quantity(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_QUANTITY
        return value


class ChartRequest(BaseModel):
    """Chart descriptor request."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(min_length=1)
    data: dict[str, object] = Field(default_factory=dict)


def parse_model(model: type[ModelT], payload: object) -> ModelT:
    """Validate a payload into a model, raising the engine's ValidationError."""
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(format_errors(exc)) from exc


def format_errors(exc: PydanticValidationError) -> list[str]:
    """Flatten pydantic errors into readable messages."""
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        details.append(f"{location}: {error['msg']}" if location else error["msg"])
    return details
