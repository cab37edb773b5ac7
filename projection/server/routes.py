"""Deployment endpoints"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse

from ..api.deployer import Deployer
from ..api.exceptions import ConfigError
from ..constants import ISSUE_CONFIG_FAILED, ErrorCode
from ..models import DeployOptions
from .schemas import InvalidRequest, parse_deploy_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/deploy", tags=["deploy"])


def get_deployer(request: Request) -> Deployer:
    """Deployer bound to the served project"""
    return request.app.state.deployer


DeployerDep = Annotated[Deployer, Depends(get_deployer)]


@router.get("/status")
def deploy_status(deployer: DeployerDep) -> JSONResponse:
    """Deployment readiness of the project."""
    return JSONResponse(deployer.status().to_dict())


@router.get("/config")
def deploy_config(deployer: DeployerDep) -> JSONResponse:
    """Resolved deployment configuration."""
    try:
        plan = deployer.config()
    except ConfigError as e:
        logger.warning(f"{ISSUE_CONFIG_FAILED}: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": ISSUE_CONFIG_FAILED, "message": e.message},
        )

    data = plan.to_dict()
    data.pop("remote", None)
    return JSONResponse(data)


@router.post("")
def run_deploy(deployer: DeployerDep, body: Annotated[Any, Body()] = None) -> JSONResponse:
    """Build and publish the site.

    Classified failures are reported with status 200 and ``success: false``;
    only unexpected exceptions produce a 500.
    """
    try:
        payload = parse_deploy_request(body)
    except InvalidRequest as e:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=e.to_dict())

    options = DeployOptions(force=bool(payload.force), message=payload.message)

    try:
        result = deployer.deploy(options)
    except Exception as e:
        logger.exception("Unexpected deployment failure")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "Deployment failed",
                "error": {"code": ErrorCode.DEPLOYMENT_ERROR, "message": str(e)},
            },
        )

    return JSONResponse(result.to_dict())
