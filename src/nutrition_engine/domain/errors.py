"""Error taxonomy for the nutrition engine."""


class NutritionEngineError(Exception):
    """Base class for engine errors."""


class ValidationError(NutritionEngineError):
    """Input failed range or enum constraints."""

    def __init__(self, details: list[str]) -> None:
        super().__init__("; ".join(details) or "Invalid input")
        self.details = details


class EnrichmentError(NutritionEngineError):
    """The enrichment service failed, timed out or gave an unusable answer."""


class ComputationError(NutritionEngineError):
    """A formula invariant cannot be satisfied for the given input."""


class RateLimitExceeded(NutritionEngineError):
    """Too many requests for a key within the window."""

    def __init__(self, retry_after: int) -> None:
        super().__init__(f"Too many requests, retry after {retry_after}s")
        self.retry_after = retry_after
