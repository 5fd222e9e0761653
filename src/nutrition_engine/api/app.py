"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from nutrition_engine.api.models import FoodAnalysisRequest, MealPlanRequest
from nutrition_engine.app_logging import configure_logging
from nutrition_engine.containers import AppContainer
from nutrition_engine.domain.errors import (
    ComputationError,
    RateLimitExceeded,
    ValidationError,
)
from nutrition_engine.domain.nutrition import (
    ChartData,
    FoodAnalysis,
    HealthInsights,
    MealPlan,
    NutritionResult,
)
from nutrition_engine.domain.requests import BiometricInput, ChartRequest

_UNPROCESSABLE = 422


async def enforce_rate_limit(request: Request) -> None:
    """Count the request against the caller's per-route budget."""
    container: AppContainer = request.app.state.container
    client_host = request.client.host if request.client else "unknown"
    container.rate_limiter.hit(f"{client_host}:{request.url.path}")


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(ValidationError)
    async def validation_error_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=_UNPROCESSABLE,
            content={"error": "Validation error", "details": exc.details},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=_UNPROCESSABLE,
            content={"error": "Validation error", "details": details},
        )

    @app.exception_handler(ComputationError)
    async def computation_error_handler(
        request: Request, exc: ComputationError
    ) -> JSONResponse:
        logger.warning("Computation failed for %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=_UNPROCESSABLE,
            content={"error": "Computation error", "details": [str(exc)]},
        )

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(
        request: Request, exc: RateLimitExceeded
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={"error": "Too many requests", "retry_after": exc.retry_after},
            headers={"Retry-After": str(exc.retry_after)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/health/assessment", dependencies=[Depends(enforce_rate_limit)])
    async def assessment(
        biometrics: BiometricInput, request: Request
    ) -> NutritionResult:
        """Analyze submitted biometrics."""
        state_container: AppContainer = request.app.state.container
        return await state_container.nutrition_engine.process_health_data(biometrics)

    @app.post("/health/insights", dependencies=[Depends(enforce_rate_limit)])
    async def insights(biometrics: BiometricInput, request: Request) -> HealthInsights:
        """Return health insights for submitted biometrics."""
        state_container: AppContainer = request.app.state.container
        return await state_container.nutrition_engine.get_health_insights(biometrics)

    @app.post("/nutrition/results", dependencies=[Depends(enforce_rate_limit)])
    async def nutrition_results(
        biometrics: BiometricInput, request: Request
    ) -> NutritionResult:
        """Calculate nutrition requirements."""
        state_container: AppContainer = request.app.state.container
        return await state_container.nutrition_engine.calculate_nutrition(biometrics)

    @app.post("/nutrition/meal-plan", dependencies=[Depends(enforce_rate_limit)])
    async def meal_plan(payload: MealPlanRequest, request: Request) -> MealPlan:
        """Generate a meal plan from calorie targets."""
        state_container: AppContainer = request.app.state.container
        return await state_container.nutrition_engine.generate_meal_plan(
            payload.nutrition, payload.dietary_restrictions
        )

    @app.post("/nutrition/analyze", dependencies=[Depends(enforce_rate_limit)])
    async def analyze(payload: FoodAnalysisRequest, request: Request) -> FoodAnalysis:
        """Analyze a batch of food items."""
        state_container: AppContainer = request.app.state.container
        return await state_container.nutrition_engine.analyze_food(payload.food_items)

    @app.post("/charts", dependencies=[Depends(enforce_rate_limit)])
    async def charts(chart: ChartRequest, request: Request) -> ChartData:
        """Generate chart data."""
        state_container: AppContainer = request.app.state.container
        return await state_container.nutrition_engine.generate_chart_data(chart)

    return app
