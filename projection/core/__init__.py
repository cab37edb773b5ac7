"""Core functionality for projection deploy"""

from .path_resolver import PathResolver
from .repository_inspector import RepositoryInspector
from .project_locator import ProjectDataLocator
from .config_loader import ConfigLoader
from .config_resolver import ConfigResolver
from .error_classifier import ErrorClassifier, ClassifiedError, classify

__all__ = [
    "PathResolver",
    "RepositoryInspector",
    "ProjectDataLocator",
    "ConfigLoader",
    "ConfigResolver",
    "ErrorClassifier",
    "ClassifiedError",
    "classify",
]
