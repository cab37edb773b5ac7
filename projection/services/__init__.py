"""Business logic services for projection deploy"""

from .build_service import SiteBuilder, CommandSiteBuilder, BuildOrchestrator
from .publish_service import (
    PublishRequest,
    BranchPublisher,
    GitBranchPublisher,
    PublishEngine,
)
from .deploy_service import DeploymentPipeline, project_lock

__all__ = [
    # Build
    "SiteBuilder",
    "CommandSiteBuilder",
    "BuildOrchestrator",

    # Publish
    "PublishRequest",
    "BranchPublisher",
    "GitBranchPublisher",
    "PublishEngine",

    # Pipeline
    "DeploymentPipeline",
    "project_lock",
]
