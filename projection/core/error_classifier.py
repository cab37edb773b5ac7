"""Mapping of raw failures to deployment error codes"""

import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..api.exceptions import (
    CommandTimeoutError,
    GitCommandError,
    ProjectionError,
    PublishError,
)
from ..constants import ERROR_MESSAGES, ERROR_SOLUTIONS, ErrorCode
from ..models.result import ErrorDetail
from ..utils.git_utils import GIT_EXECUTABLE

# Codes that are trusted when an exception carries them
STRUCTURED_CODES = (
    ErrorCode.VALIDATION_ERROR,
    ErrorCode.CONFIG_ERROR,
    ErrorCode.BUILD_ERROR,
    ErrorCode.TIMEOUT,
)

# Substring rules, first match wins
TEXT_RULES: Sequence[Tuple[str, Sequence[str]]] = (
    (ErrorCode.AUTH_ERROR, (
        "permission denied", "authentication", "publickey",
        "access denied", "401", "403",
    )),
    (ErrorCode.PUSH_REJECTED, (
        "rejected", "conflict", "non-fast-forward", "failed to push",
    )),
    (ErrorCode.GIT_ERROR, (
        "not found", "does not exist", "not a git repository", "no remote",
    )),
    (ErrorCode.NETWORK_ERROR, (
        "network", "timeout", "timed out", "connection refused",
        "econnrefused", "could not resolve host", "enotfound",
    )),
)


@dataclass
class ClassifiedError:
    """A failure with its code, fixed message and remediation hint"""

    code: str
    message: str
    solution: str
    details: Optional[str] = None

    def to_detail(self) -> ErrorDetail:
        return ErrorDetail(
            code=self.code,
            message=self.message,
            details=self.details,
            solution=self.solution,
        )


def error_text(error: BaseException) -> str:
    """Exception text plus any captured stderr"""
    text = str(error)

    stderr = getattr(error, 'stderr', None)
    if isinstance(stderr, bytes):
        stderr = stderr.decode('utf-8', errors='replace')
    if stderr and stderr not in text:
        text = f"{text}\n{stderr}"

    return text


def classification_text(error: BaseException) -> str:
    """Text the substring rules are matched against

    A failed git command is judged by its output only, its command line
    carries user text such as the commit message and remote URL.
    """
    if isinstance(error, GitCommandError):
        return "\n".join(part for part in (error.stderr, error.stdout) if part)
    return error_text(error)


def classify_text(text: str) -> str:
    """Pick an error code from raw failure text"""
    lowered = text.lower()
    for code, needles in TEXT_RULES:
        if any(needle in lowered for needle in needles):
            return code
    return ErrorCode.DEPLOYMENT_ERROR


class ErrorClassifier:
    """Turns exceptions into classified errors"""

    def classify(self, error: BaseException) -> ClassifiedError:
        """
        Classify a failure

        Args:
            error: Exception raised by a pipeline stage

        Returns:
            ClassifiedError carrying the raw text in ``details``
        """
        code = self.structured_code(error)
        text = error_text(error)
        if code is None:
            code = classify_text(classification_text(error))

        details = text
        if isinstance(error, ProjectionError) and error.details and error.details not in text:
            details = f"{text}\n{error.details}"

        solution = ERROR_SOLUTIONS[code]
        if isinstance(error, ProjectionError) and error.solution:
            solution = error.solution

        return ClassifiedError(
            code=code,
            message=self.message_for(code, error),
            solution=solution,
            details=details or None,
        )

    def structured_code(self, error: BaseException) -> Optional[str]:
        """Code derived from the exception type, if it carries one"""
        if isinstance(error, (CommandTimeoutError, subprocess.TimeoutExpired)):
            return ErrorCode.TIMEOUT
        if isinstance(error, GitCommandError):
            return None
        if isinstance(error, ProjectionError) and error.error_code in STRUCTURED_CODES:
            return error.error_code
        if isinstance(error, PublishError):
            return error.error_code
        if isinstance(error, FileNotFoundError) and error.filename == GIT_EXECUTABLE:
            # Raised by subprocess when the git binary is missing
            return ErrorCode.GIT_ERROR
        if isinstance(error, OSError):
            # Local filesystem failure
            return ErrorCode.DEPLOYMENT_ERROR
        return None

    def message_for(self, code: str, error: BaseException) -> str:
        """Human readable message for a code

        Pre-flight and configuration errors keep their own message, the
        rest use the fixed text per code.
        """
        if code in (ErrorCode.VALIDATION_ERROR, ErrorCode.CONFIG_ERROR) \
                and isinstance(error, ProjectionError):
            return error.message
        return ERROR_MESSAGES[code]


def classify(error: BaseException) -> ClassifiedError:
    """Classify a failure with the default classifier"""
    return ErrorClassifier().classify(error)
