from __future__ import annotations

from fastapi import FastAPI

from framefit.application.dtos.common_dto import HealthResponse, RootResponse
from framefit.infrastructure.api.error_handlers import add_error_handlers
from framefit.infrastructure.api.middlewares import add_default_middlewares
from framefit.infrastructure.api.routes.device_routes import router as device_router
from framefit.infrastructure.api.routes.image_routes import router as image_router
from framefit.infrastructure.api.routes.optimization_routes import router as optimization_router
from framefit.infrastructure.config import get_settings
from framefit.infrastructure.logging_config import configure_logging


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)
    app = FastAPI(
        title="FrameFit",
        version="0.1.0",
        description="""
        ## FrameFit API

        Decides how to place an image inside a device screen cut-out: scale,
        crop window, anchor position and tone hints, with a deterministic
        explanation of the choice. Pixels are never modified; a downstream
        renderer applies the plan.

        ### Features
        - **Image Analysis**: resolution class, sharpness, noise, orientation, format
        - **Frame Specs**: viewport size, display scale and resolution bands per device
        - **Placement Planning**: contain / cover / fill / smart strategies with crop and focus point
        - **Compatibility Scoring**: 0-100 score with issues and recommendations
        - **Device Audit**: catalog data validation

        ### Error Responses
        - **400 Bad Request**: Unreadable image or unknown strategy
        - **404 Not Found**: Unknown device id
        - **408 Request Timeout**: Image decoding took too long
        - **413 Payload Too Large**: Upload exceeds the configured limit
        - **422 Unprocessable Entity**: Validation error or malformed catalog data
        """,
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
    )
    add_default_middlewares(app, settings)
    add_error_handlers(app)

    @app.get(
        "/",
        response_model=RootResponse,
        summary="API Root",
        description="Get basic information about the FrameFit API",
    )
    def root():
        """Get API root information."""
        return {"status": "ok", "service": "framefit", "version": app.version}

    @app.get("/health", response_model=HealthResponse, summary="Health Check")
    def health():
        """Check API health status."""
        return {"status": "healthy"}

    app.include_router(device_router)
    app.include_router(image_router)
    app.include_router(optimization_router)
    return app


app = create_app()
