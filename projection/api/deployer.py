"""Deployer API for deployment operations"""

from pathlib import Path
from typing import Optional, Union

from ..constants import DEFAULT_REMOTE
from ..models import DeployOptions, DeploymentPlan, DeploymentResult, DeploymentStatus
from ..services.deploy_service import DeploymentPipeline, Reporter


class Deployer:
    """Deployer bound to one project directory"""

    def __init__(self, project_root: Union[str, Path] = ".",
                 pipeline: Optional[DeploymentPipeline] = None):
        """
        Initialize deployer

        Args:
            project_root: Project directory
            pipeline: Deployment pipeline (a default one is created if omitted)
        """
        self.project_root = Path(project_root).resolve()
        self.pipeline = pipeline or DeploymentPipeline()

    def deploy(self, options: Optional[DeployOptions] = None,
               reporter: Optional[Reporter] = None,
               **kwargs) -> DeploymentResult:
        """
        Deploy the project

        Args:
            options: Deployment options
            reporter: Progress callback
            **kwargs: DeployOptions fields, used when options is omitted

        Returns:
            DeploymentResult
        """
        if options is None:
            options = DeployOptions(**kwargs)
        return self.pipeline.run(self.project_root, options, reporter)

    def status(self, remote: str = DEFAULT_REMOTE) -> DeploymentStatus:
        """Deployment readiness of the project"""
        return self.pipeline.status(self.project_root, remote)

    def config(self, options: Optional[DeployOptions] = None) -> DeploymentPlan:
        """Resolved deployment plan

        Raises:
            ConfigError: If the plan cannot be resolved
        """
        return self.pipeline.config(self.project_root, options)


def deploy(project_root: Union[str, Path] = ".", **kwargs) -> DeploymentResult:
    """Deploy a project with the default pipeline"""
    return Deployer(project_root).deploy(**kwargs)


def status(project_root: Union[str, Path] = ".",
           remote: str = DEFAULT_REMOTE) -> DeploymentStatus:
    """Check deployment readiness with the default pipeline"""
    return Deployer(project_root).status(remote)
