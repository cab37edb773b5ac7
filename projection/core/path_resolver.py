"""Path resolution module for projection deploy"""

from pathlib import Path
from typing import Iterable, Optional, Union


class PathResolver:
    """Resolves paths within a portfolio project"""

    def __init__(self, project_root: Union[str, Path]):
        """Initialize path resolver

        Args:
            project_root: Root directory of the project
        """
        self.project_root = Path(project_root).resolve()

    def resolve(self, path: Union[str, Path]) -> Path:
        """Resolve a path relative to project root

        Args:
            path: Path to resolve (can be relative or absolute)

        Returns:
            Resolved absolute path
        """
        path = Path(path)

        if path.is_absolute():
            return path

        return (self.project_root / path).resolve()

    def find_first(self, names: Iterable[str]) -> Optional[Path]:
        """Return the first of the given file names present in project root

        Args:
            names: Candidate file names, in priority order

        Returns:
            Path of the first existing file or None
        """
        for name in names:
            candidate = self.project_root / name
            if candidate.is_file():
                return candidate
        return None

    def get_relative_to_root(self, path: Union[str, Path]) -> Path:
        """Express a path relative to project root when it lies inside it"""
        path = self.resolve(path)
        try:
            return path.relative_to(self.project_root)
        except ValueError:
            return path
