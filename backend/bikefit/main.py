"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bikefit.config import get_settings
from bikefit.core.exceptions import BikeFitException
from bikefit.api.routes import calculator, health, search
from bikefit.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def bikefit_exception_handler(request: Request, exc: BikeFitException) -> JSONResponse:
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail, "code": exc.code},
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = "; ".join(
        f"{'.'.join(str(x) for x in err.get('loc', []))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    logger.warning("%s %s invalid request: %s", request.method, request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"success": False, "error": errors, "code": "INVALID_REQUEST"},
    )


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level.upper(), log_file=settings.log_file)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Bike fit geometry engine and frame search",
        debug=settings.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.add_exception_handler(BikeFitException, bikefit_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(health.router, tags=["Health"])
    app.include_router(calculator.router, prefix="/api/v1/calculator", tags=["Calculator"])
    app.include_router(search.router, prefix="/api/v1/bikes", tags=["Bike Search"])

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("bikefit.main:app", host=settings.host, port=settings.port)
