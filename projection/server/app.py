"""Admin API application"""

import logging
from pathlib import Path
from typing import Optional, Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..__version__ import __version__
from ..api.deployer import Deployer
from ..api.exceptions import ProjectionError
from ..constants import API_PREFIX
from .routes import router
from .schemas import BODY_NOT_OBJECT, INVALID_REQUEST

logger = logging.getLogger(__name__)


def create_app(project_root: Union[str, Path] = ".",
               deployer: Optional[Deployer] = None) -> FastAPI:
    """
    Create the admin API application

    Args:
        project_root: Project served by this application
        deployer: Deployer to use (one bound to project_root by default)

    Returns:
        FastAPI application
    """
    app = FastAPI(
        title="Projection Admin API",
        description="Deployment endpoints for the projection admin interface",
        version=__version__,
    )
    app.state.deployer = deployer or Deployer(project_root)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Malformed JSON bodies."""
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": INVALID_REQUEST, "message": BODY_NOT_OBJECT},
        )

    @app.exception_handler(ProjectionError)
    async def projection_error_handler(
        request: Request, exc: ProjectionError
    ) -> JSONResponse:
        """Errors escaping an endpoint."""
        logger.error(f"{request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": exc.error_code,
                    "message": exc.message,
                    "details": exc.details,
                }
            },
        )

    app.include_router(router, prefix=API_PREFIX)

    logger.info(f"Admin API serving {app.state.deployer.project_root}")
    return app
