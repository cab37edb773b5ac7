"""Operation result models"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import DeploymentPlan
from .git import GitRepositoryStatus


@dataclass
class ErrorDetail:
    """Classified error information"""

    code: str
    message: str
    details: Optional[str] = None
    solution: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            data["details"] = self.details
        if self.solution:
            data["solution"] = self.solution
        return data


@dataclass
class DeploymentResult:
    """Outcome of one deployment attempt

    Exactly one of ``url`` (success) or ``error`` (failure) is set.
    """

    success: bool
    message: str
    duration_ms: int = 0
    url: Optional[str] = None
    branch: Optional[str] = None
    error: Optional[ErrorDetail] = None
    plan: Optional[DeploymentPlan] = None

    @classmethod
    def succeeded(cls, message: str, plan: DeploymentPlan,
                  duration_ms: int) -> 'DeploymentResult':
        return cls(
            success=True,
            message=message,
            duration_ms=duration_ms,
            url=plan.site_url,
            branch=plan.branch,
            plan=plan,
        )

    @classmethod
    def failed(cls, error: ErrorDetail, duration_ms: int,
               plan: Optional[DeploymentPlan] = None) -> 'DeploymentResult':
        return cls(
            success=False,
            message="Deployment failed",
            duration_ms=duration_ms,
            branch=plan.branch if plan else None,
            error=error,
            plan=plan,
        )

    @property
    def duration(self) -> float:
        """Duration in seconds"""
        return self.duration_ms / 1000.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the HTTP response body"""
        data = {
            "success": self.success,
            "message": self.message,
            "duration": self.duration_ms,
        }
        if self.url:
            data["url"] = self.url
        if self.branch:
            data["branch"] = self.branch
        if self.error:
            data["error"] = self.error.to_dict()
        if self.plan:
            data["plan"] = self.plan.to_dict()
        return data


@dataclass
class DeploymentStatus:
    """Deployment readiness report"""

    git_installed: bool
    git: GitRepositoryStatus = field(default_factory=GitRepositoryStatus)
    issues: List[str] = field(default_factory=list)
    plan: Optional[DeploymentPlan] = None

    @property
    def ready(self) -> bool:
        """Deployment is ready when no check failed"""
        return not self.issues

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the HTTP response body"""
        data = {"ready": self.ready, "gitInstalled": self.git_installed}
        data.update(self.git.to_dict())

        if self.issues:
            data["issues"] = list(self.issues)
        if self.plan:
            data["deployConfig"] = {
                "branch": self.plan.branch,
                "baseUrl": self.plan.base_url,
                "homepage": self.plan.homepage,
                "buildDir": self.plan.build_dir,
            }
        return data
