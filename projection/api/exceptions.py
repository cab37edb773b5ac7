"""Exception definitions for projection deploy"""

from typing import List, Optional, Sequence

from ..constants import ErrorCode


class ProjectionError(Exception):
    """Base exception for projection deploy"""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[str] = None, solution: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or ErrorCode.DEPLOYMENT_ERROR
        self.details = details
        self.solution = solution


class ValidationError(ProjectionError):
    """Pre-flight check failed"""

    def __init__(self, message: str, solution: Optional[str] = None,
                 details: Optional[str] = None):
        super().__init__(message, ErrorCode.VALIDATION_ERROR, details, solution)


class DeploymentInProgressError(ValidationError):
    """Another deployment holds the project lock"""

    def __init__(self, project_root: str):
        super().__init__(
            f"A deployment is already running for {project_root}",
            solution="Wait for the running deployment to finish and try again."
        )
        self.project_root = project_root


class ConfigError(ProjectionError):
    """Configuration error"""

    def __init__(self, message: str, solution: Optional[str] = None,
                 errors: Optional[Sequence[str]] = None):
        self.errors: List[str] = list(errors or [])
        details = "\n".join(self.errors) if self.errors else None
        super().__init__(message, ErrorCode.CONFIG_ERROR, details, solution)


class BuildError(ProjectionError):
    """Build step failed

    ``original_error`` keeps the builder's failure text verbatim.
    """

    def __init__(self, message: str, original_error: Optional[str] = None,
                 solution: Optional[str] = None):
        super().__init__(message, ErrorCode.BUILD_ERROR, original_error, solution)
        self.original_error = original_error


class PublishError(ProjectionError):
    """Publishing to the pages branch failed"""
    pass


class GitCommandError(PublishError):
    """A git command exited with a non-zero status"""

    def __init__(self, command: Sequence[str], returncode: int,
                 stderr: str = "", stdout: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        self.stdout = (stdout or "").strip()

        message = f"Command failed ({returncode}): {' '.join(self.command)}"
        if self.stderr:
            message = f"{message}\n{self.stderr}"
        super().__init__(message, ErrorCode.DEPLOYMENT_ERROR, self.stderr or None)


class CommandTimeoutError(ProjectionError):
    """A subprocess exceeded its deadline"""

    def __init__(self, command: Sequence[str], timeout: float):
        self.command = list(command)
        self.timeout = timeout
        super().__init__(
            f"Command timed out after {timeout:g}s: {' '.join(self.command)}",
            ErrorCode.TIMEOUT
        )
