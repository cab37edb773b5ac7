"""Site build orchestration"""

import logging
import os
import shlex
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ..api.exceptions import BuildError, CommandTimeoutError, ProjectionError
from ..constants import (
    DEFAULT_BUILD_TIMEOUT,
    ENV_BASE_URL,
    ENV_BUILD_TIMEOUT,
    ENV_OUTPUT_DIR,
)
from ..utils.env_utils import get_timeout
from ..utils.file_utils import clean_directory

logger = logging.getLogger(__name__)


class SiteBuilder(ABC):
    """Abstract site generator"""

    @abstractmethod
    def build(self, cwd: Path, output_dir: Path, base_url: str) -> None:
        """
        Generate the static site

        Args:
            cwd: Project directory
            output_dir: Directory receiving the generated site
            base_url: Base URL the site is served under

        Raises:
            BuildError: If generation fails
        """
        pass


class CommandSiteBuilder(SiteBuilder):
    """Runs the project's build command as a subprocess

    The command may reference ``{output_dir}`` and ``{base_url}``; both
    values are also exported as environment variables.
    """

    def __init__(self, command: Optional[str], timeout: Optional[float] = None):
        self.command = command
        self.timeout = timeout or get_timeout(ENV_BUILD_TIMEOUT, DEFAULT_BUILD_TIMEOUT)

    def render_command(self, output_dir: Path, base_url: str) -> list:
        """Split the command and substitute placeholders"""
        args = shlex.split(self.command)
        return [
            arg.replace("{output_dir}", str(output_dir)).replace("{base_url}", base_url)
            for arg in args
        ]

    def build(self, cwd: Path, output_dir: Path, base_url: str) -> None:
        if not self.command:
            raise BuildError(
                "No build command configured",
                solution="Set buildCommand in projection.config.json, "
                         "pass --build-command, or use --no-build to deploy existing files"
            )

        try:
            args = self.render_command(output_dir, base_url)
        except ValueError as e:
            raise BuildError(f"Invalid build command: {self.command}", original_error=str(e))

        env = dict(os.environ)
        env[ENV_OUTPUT_DIR] = str(output_dir)
        env[ENV_BASE_URL] = base_url

        logger.info(f"Running build command: {' '.join(args)}")

        try:
            result = subprocess.run(
                args,
                cwd=str(cwd),
                env=env,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            raise CommandTimeoutError(args, self.timeout)
        except OSError as e:
            raise BuildError(f"Cannot run build command: {args[0]}", original_error=str(e))

        output = "\n".join(part.strip() for part in (result.stdout, result.stderr) if part.strip())
        if result.returncode != 0:
            raise BuildError(
                f"Build command failed with exit code {result.returncode}",
                original_error=output or None
            )

        if output:
            logger.debug(output)


class BuildOrchestrator:
    """Cleans the output directory and runs the site builder"""

    def __init__(self, builder: SiteBuilder):
        self.builder = builder

    def build(self, cwd: Path, output_dir: Path, base_url: str, clean: bool = True) -> None:
        """
        Build the site

        Args:
            cwd: Project directory
            output_dir: Output directory
            base_url: Base URL for generated links
            clean: Remove the output directory contents first

        Raises:
            BuildError: If cleaning or building fails
            CommandTimeoutError: If the build exceeds its deadline
        """
        if clean:
            try:
                removed = clean_directory(output_dir)
            except OSError as e:
                raise BuildError(
                    f"Failed to clean output directory: {output_dir}",
                    original_error=str(e)
                )
            logger.debug(f"Removed {removed} entries from {output_dir}")
        else:
            output_dir.mkdir(parents=True, exist_ok=True)

        try:
            self.builder.build(cwd, output_dir, base_url)
        except (BuildError, CommandTimeoutError):
            raise
        except ProjectionError as e:
            raise BuildError(e.message, original_error=e.details or e.message)
        except Exception as e:
            # Builders are opaque, their failure text is kept verbatim
            raise BuildError(str(e) or type(e).__name__, original_error=str(e))

        logger.info(f"Build completed in {output_dir}")
