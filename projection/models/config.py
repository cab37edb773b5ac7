"""Deployment configuration models"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..constants import DEFAULT_BASE_URL
from ..utils.url_utils import generate_pages_url, normalize_site_url


@dataclass
class DeployOptions:
    """Caller supplied deployment options

    Optional values stay ``None`` until the configuration is resolved.
    """

    branch: Optional[str] = None
    message: Optional[str] = None
    remote: Optional[str] = None
    build_dir: Optional[str] = None
    no_build: bool = False
    dry_run: bool = False
    force: bool = False

    # Explicit generator configuration file
    config_path: Optional[str] = None
    # Overrides buildCommand from the configuration file
    build_command: Optional[str] = None


@dataclass
class ProjectConfig:
    """Deploy relevant part of the generator configuration"""

    base_url: str = DEFAULT_BASE_URL
    output: Optional[str] = None
    homepage: Optional[str] = None
    deploy_branch: Optional[str] = None
    build_command: Optional[str] = None
    source: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: Optional[Path] = None) -> 'ProjectConfig':
        """Create from the raw configuration mapping"""
        return cls(
            base_url=data.get("baseUrl") or DEFAULT_BASE_URL,
            output=data.get("output"),
            homepage=data.get("homepage") or None,
            deploy_branch=data.get("deployBranch"),
            build_command=data.get("buildCommand"),
            source=source,
        )


@dataclass
class DeploymentPlan:
    """Fully resolved parameters for one deployment"""

    repository_url: str
    homepage: Optional[str]
    base_url: str
    branch: str
    build_dir: str
    remote: str
    build_command: Optional[str] = None

    def __post_init__(self):
        if not self.repository_url:
            raise ValueError("DeploymentPlan requires a repository URL")

    @property
    def site_url(self) -> str:
        """Public URL of the deployed site"""
        if self.homepage:
            return normalize_site_url(self.homepage)
        return generate_pages_url(self.repository_url)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "repositoryUrl": self.repository_url,
            "branch": self.branch,
            "baseUrl": self.base_url,
            "homepage": self.homepage,
            "buildDir": self.build_dir,
            "remote": self.remote,
        }
