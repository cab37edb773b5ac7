"""Resolution of the deployment plan"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..api.exceptions import ConfigError
from ..constants import (
    DEFAULT_BASE_URL,
    DEFAULT_BUILD_DIR,
    DEFAULT_DEPLOY_BRANCH,
    DEFAULT_REMOTE,
)
from ..models.config import DeployOptions, DeploymentPlan
from ..utils.url_utils import default_base_url
from .config_loader import ConfigLoader
from .repository_inspector import RepositoryInspector

logger = logging.getLogger(__name__)


class ConfigResolver:
    """Merges caller options, the project configuration and Git metadata

    Precedence per field: explicit option, configuration file, value
    derived from the remote URL, built-in default.
    """

    def __init__(self, inspector: Optional[RepositoryInspector] = None):
        self.inspector = inspector or RepositoryInspector()

    def resolve(self, cwd: Union[str, Path],
                options: Optional[DeployOptions] = None) -> DeploymentPlan:
        """
        Build the deployment plan for a project

        Args:
            cwd: Project directory
            options: Caller options

        Returns:
            DeploymentPlan

        Raises:
            ConfigError: If the remote has no URL or the configuration is invalid
        """
        options = options or DeployOptions()
        remote = options.remote or DEFAULT_REMOTE

        repository_url = self.inspector.get_remote_url(cwd, remote)
        if not repository_url:
            raise ConfigError(
                f"No Git remote '{remote}' found",
                solution=f"Add a remote with: git remote add {remote} <repository-url>"
            )

        config = ConfigLoader(cwd).load(options.config_path)

        if config.base_url and config.base_url != DEFAULT_BASE_URL:
            base_url = config.base_url
        else:
            base_url = default_base_url(repository_url)

        plan = DeploymentPlan(
            repository_url=repository_url,
            homepage=config.homepage,
            base_url=base_url,
            branch=options.branch or config.deploy_branch or DEFAULT_DEPLOY_BRANCH,
            build_dir=options.build_dir or config.output or DEFAULT_BUILD_DIR,
            remote=remote,
            build_command=options.build_command or config.build_command,
        )

        logger.debug(f"Resolved deployment plan: {plan.to_dict()}")
        return plan
