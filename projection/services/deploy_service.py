"""Deployment pipeline shared by the CLI and the admin server"""

import logging
import subprocess
import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from ..api.exceptions import (
    ConfigError,
    DeploymentInProgressError,
    ProjectionError,
    ValidationError,
)
from ..constants import (
    DEFAULT_REMOTE,
    ISSUE_CONFIG_FAILED,
    ISSUE_GIT_NOT_INSTALLED,
    ISSUE_NO_PROJECTS_FILE,
    ISSUE_NO_REMOTE,
    ISSUE_NOT_A_REPOSITORY,
    STAGE_BUILD,
    STAGE_CHECK_GIT,
    STAGE_DONE,
    STAGE_DRY_RUN,
    STAGE_LOCATE_PROJECT_DATA,
    STAGE_PUBLISH,
    STAGE_RESOLVE_CONFIG,
    STAGE_VALIDATE_REPOSITORY,
)
from ..core.config_resolver import ConfigResolver
from ..core.error_classifier import ErrorClassifier
from ..core.path_resolver import PathResolver
from ..core.project_locator import ProjectDataLocator
from ..core.repository_inspector import RepositoryInspector
from ..models.config import DeployOptions, DeploymentPlan
from ..models.result import DeploymentResult, DeploymentStatus
from .build_service import BuildOrchestrator, CommandSiteBuilder, SiteBuilder
from .publish_service import BranchPublisher, PublishEngine

logger = logging.getLogger(__name__)

Reporter = Callable[[str, str], None]

DRY_RUN_MESSAGE = "Dry run complete. No deployment was performed."
SUCCESS_MESSAGE = "Deployment completed successfully"

_project_locks: Dict[str, threading.Lock] = {}
_project_locks_guard = threading.Lock()


@contextmanager
def project_lock(project_root: Union[str, Path]):
    """Hold the per-project deployment lock

    Raises:
        DeploymentInProgressError: If another deployment holds it
    """
    key = str(Path(project_root).resolve())
    with _project_locks_guard:
        lock = _project_locks.setdefault(key, threading.Lock())

    if not lock.acquire(blocking=False):
        raise DeploymentInProgressError(key)
    try:
        yield
    finally:
        lock.release()


def _logging_reporter(reporter: Optional[Reporter]) -> Reporter:
    def report(stage: str, message: str) -> None:
        logger.info(f"[{stage}] {message}")
        if reporter is not None:
            reporter(stage, message)
    return report


class DeploymentPipeline:
    """Runs the ordered deployment stages

    CheckGitInstalled, ValidateRepository, LocateProjectData and
    ResolveConfig gate everything else. A dry run stops after resolution.
    Build is skipped with ``no_build``; Publish always runs otherwise.
    """

    def __init__(self,
                 inspector: Optional[RepositoryInspector] = None,
                 locator: Optional[ProjectDataLocator] = None,
                 resolver: Optional[ConfigResolver] = None,
                 builder: Optional[SiteBuilder] = None,
                 publisher: Optional[BranchPublisher] = None,
                 classifier: Optional[ErrorClassifier] = None):
        """
        Initialize the pipeline

        Args:
            inspector: Git environment inspector
            locator: Project data locator
            resolver: Deployment plan resolver (defaults to one sharing the inspector)
            builder: Site builder (defaults to the configured build command)
            publisher: Branch publisher (defaults to git)
            classifier: Error classifier
        """
        self.inspector = inspector or RepositoryInspector()
        self.locator = locator or ProjectDataLocator()
        self.resolver = resolver or ConfigResolver(self.inspector)
        self.builder = builder
        self.publish_engine = PublishEngine(publisher)
        self.classifier = classifier or ErrorClassifier()

    def run(self, cwd: Union[str, Path],
            options: Optional[DeployOptions] = None,
            reporter: Optional[Reporter] = None) -> DeploymentResult:
        """
        Deploy the project

        Args:
            cwd: Project directory
            options: Deployment options
            reporter: Progress callback receiving (stage, message)

        Returns:
            DeploymentResult; classified failures are returned, not raised
        """
        options = options or DeployOptions()
        report = _logging_reporter(reporter)
        start = time.monotonic()
        plan: Optional[DeploymentPlan] = None

        def elapsed() -> int:
            return int((time.monotonic() - start) * 1000)

        try:
            with project_lock(cwd):
                project_root = Path(cwd).resolve()
                self._preflight(project_root, options.remote or DEFAULT_REMOTE, report)

                report(STAGE_RESOLVE_CONFIG, "Resolving deployment configuration")
                plan = self.resolver.resolve(project_root, options)

                if options.dry_run:
                    report(STAGE_DRY_RUN, DRY_RUN_MESSAGE)
                    return DeploymentResult.succeeded(DRY_RUN_MESSAGE, plan, elapsed())

                build_dir = PathResolver(project_root).resolve(plan.build_dir)

                if options.no_build:
                    report(STAGE_BUILD, "Skipping build (--no-build)")
                else:
                    report(STAGE_BUILD, f"Building site into {build_dir}")
                    self._orchestrator(plan).build(
                        project_root, build_dir, plan.base_url, clean=True
                    )

                report(STAGE_PUBLISH, f"Publishing to {plan.remote}/{plan.branch}")
                self.publish_engine.publish(build_dir, plan, options, cwd=project_root)

                report(STAGE_DONE, SUCCESS_MESSAGE)
                logger.info(f"Deployed {project_root} to {plan.site_url}")
                return DeploymentResult.succeeded(SUCCESS_MESSAGE, plan, elapsed())

        except (ProjectionError, subprocess.SubprocessError, OSError) as e:
            classified = self.classifier.classify(e)
            logger.error(f"Deployment failed [{classified.code}]: {e}")
            return DeploymentResult.failed(classified.to_detail(), elapsed(), plan)

    def status(self, cwd: Union[str, Path],
               remote: str = DEFAULT_REMOTE) -> DeploymentStatus:
        """
        Run every readiness check without stopping at the first failure

        Args:
            cwd: Project directory
            remote: Remote to check

        Returns:
            DeploymentStatus listing each failed check
        """
        project_root = Path(cwd).resolve()
        status = DeploymentStatus(git_installed=self.inspector.is_installed())

        if not status.git_installed:
            status.issues.append(ISSUE_GIT_NOT_INSTALLED)
            return status

        status.git = self.inspector.validate(project_root, remote)
        if not status.git.is_git_repo:
            status.issues.append(ISSUE_NOT_A_REPOSITORY)
        if not status.git.has_remote:
            status.issues.append(ISSUE_NO_REMOTE)

        if self.locator.find(project_root) is None:
            status.issues.append(ISSUE_NO_PROJECTS_FILE)

        if status.git.is_git_repo and status.git.has_remote:
            try:
                status.plan = self.resolver.resolve(project_root, DeployOptions(remote=remote))
            except ConfigError as e:
                logger.warning(f"{ISSUE_CONFIG_FAILED}: {e}")
                status.issues.append(ISSUE_CONFIG_FAILED)

        return status

    def config(self, cwd: Union[str, Path],
               options: Optional[DeployOptions] = None) -> DeploymentPlan:
        """
        Resolve the deployment plan without deploying

        Raises:
            ConfigError: If the plan cannot be resolved
        """
        return self.resolver.resolve(Path(cwd).resolve(), options)

    def _preflight(self, project_root: Path, remote: str, report: Reporter) -> None:
        report(STAGE_CHECK_GIT, "Checking Git installation")
        if not self.inspector.is_installed():
            raise ValidationError(
                ISSUE_GIT_NOT_INSTALLED,
                solution="Install Git from https://git-scm.com/downloads"
            )

        report(STAGE_VALIDATE_REPOSITORY, "Validating Git repository")
        git_status = self.inspector.validate(project_root, remote)
        if not git_status.is_git_repo:
            raise ValidationError(
                "Not a git repository",
                solution="Initialize one with: git init"
            )
        if not git_status.has_remote:
            raise ValidationError(
                f"No git remote '{remote}' found",
                solution=f"Add a remote with: git remote add {remote} <repository-url>"
            )

        report(STAGE_LOCATE_PROJECT_DATA, "Looking for project data")
        data_file = self.locator.find(project_root)
        if data_file is None:
            raise ValidationError(
                ISSUE_NO_PROJECTS_FILE,
                solution=f"Create one of: {', '.join(self.locator.supported_file_names())}"
            )
        logger.info(f"Using project data from {data_file.path.name}")

    def _orchestrator(self, plan: DeploymentPlan) -> BuildOrchestrator:
        return BuildOrchestrator(self.builder or CommandSiteBuilder(plan.build_command))
