"""FastAPI application factory."""

import logging
from dataclasses import asdict

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from body_tracker.api.entries import router as entries_router
from body_tracker.api.models import MeasurementForm
from body_tracker.app_logging import configure_logging
from body_tracker.containers import AppContainer
from body_tracker.domain.errors import BodyFatDomainError, MeasurementValidationError
from body_tracker.services.calculator import calculate, parse_measurement_input


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Body Composition Tracker")
    app.state.container = container

    app.include_router(entries_router)

    @app.exception_handler(MeasurementValidationError)
    async def validation_error_handler(
        request: Request, exc: MeasurementValidationError
    ) -> JSONResponse:
        logger.info("Rejected measurements: %s", exc, extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc)},
        )

    @app.exception_handler(BodyFatDomainError)
    async def domain_error_handler(
        request: Request, exc: BodyFatDomainError
    ) -> JSONResponse:
        logger.info("Undefined body fat: %s", exc, extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/calculate")
    async def calculate_metrics(
        form: MeasurementForm, request: Request
    ) -> dict[str, object]:
        """Compute metrics for the submitted measurements without saving."""
        state_container: AppContainer = request.app.state.container
        unit_system = form.unit_system or state_container.settings.default_unit_system
        measurements = parse_measurement_input(form.model_dump())
        result = calculate(measurements, unit_system)
        return {
            "measurements": asdict(measurements),
            "result": asdict(result),
            "units": {
                "mass": result.unit_system.mass_unit,
                "length": result.unit_system.length_unit,
            },
        }

    return app
