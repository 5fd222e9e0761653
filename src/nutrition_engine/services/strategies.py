"""Interchangeable sources for numeric and textual nutrition values.

``RemoteStrategy`` asks the enrichment service, ``FormulaStrategy`` computes
from the biometrics, and ``FallbackSelector`` composes the two so callers never
handle enrichment failures themselves.
"""

import logging
from dataclasses import dataclass
from typing import Literal, Protocol, get_args

from nutrition_engine.domain.errors import EnrichmentError
from nutrition_engine.domain.requests import BiometricInput
from nutrition_engine.services import formulas
from nutrition_engine.services.enrichment import EnrichmentService
from nutrition_engine.services.queries import METRIC_QUERIES

Metric = Literal["bmi", "bmr", "tdee", "calories", "protein_g", "carbs_g", "fats_g"]
METRICS: tuple[Metric, ...] = get_args(Metric)

_logger = logging.getLogger(__name__)


class MetricStrategy(Protocol):
    """Source of a single numeric metric."""

    async def resolve(self, metric: Metric, biometrics: BiometricInput) -> float:
        """Return the metric value or raise EnrichmentError."""


@dataclass
class RemoteStrategy(MetricStrategy):
    """Metric values answered by the enrichment service."""

    enrichment: EnrichmentService

    async def resolve(self, metric: Metric, biometrics: BiometricInput) -> float:
        value = await self.enrichment.query_number(METRIC_QUERIES[metric](biometrics))
        if value is None:
            raise EnrichmentError(f"No numeric answer for {metric}")
        return value


@dataclass
class FormulaStrategy(MetricStrategy):
    """Metric values computed by the formula library."""

    async def resolve(self, metric: Metric, biometrics: BiometricInput) -> float:
        return self.compute(metric, biometrics)

    def compute(self, metric: Metric, biometrics: BiometricInput) -> float:
        """Compute only as much of the formula chain as the metric needs."""
        if metric == "bmi":
            return formulas.calculate_bmi(biometrics.height_cm, biometrics.weight_kg)
        bmr = formulas.calculate_bmr(
            biometrics.gender,
            biometrics.age,
            biometrics.height_cm,
            biometrics.weight_kg,
        )
        if metric == "bmr":
            return bmr
        tdee = formulas.calculate_tdee(bmr, biometrics.activity_level)
        if metric == "tdee":
            return tdee
        calories = formulas.adjust_calories_for_goal(tdee, biometrics.health_goal)
        if metric == "calories":
            return calories
        macros = formulas.calculate_macros(biometrics.weight_kg, calories)
        return getattr(macros, metric)


@dataclass
class FallbackSelector(MetricStrategy):
    """Try the primary strategy and substitute the fallback on EnrichmentError."""

    primary: MetricStrategy
    fallback: MetricStrategy

    async def resolve(self, metric: Metric, biometrics: BiometricInput) -> float:
        try:
            return await self.primary.resolve(metric, biometrics)
        except EnrichmentError as exc:
            _logger.info("Using fallback for %s: %s", metric, exc)
            return await self.fallback.resolve(metric, biometrics)


@dataclass
class TextSelector:
    """Enrichment text with a fixed default."""

    enrichment: EnrichmentService

    async def fetch(self, query: str) -> str | None:
        """Return the answer text, or None when enrichment is unavailable."""
        try:
            return await self.enrichment.query(query)
        except EnrichmentError:
            return None

    async def resolve(self, query: str, default: str) -> str:
        """Return the answer text or the default."""
        answer = await self.fetch(query)
        return answer if answer else default
