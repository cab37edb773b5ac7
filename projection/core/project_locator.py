"""Discovery of the portfolio's project data file"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..constants import PROJECT_DATA_FILES
from ..models.project import ProjectDataFile
from .path_resolver import PathResolver

logger = logging.getLogger(__name__)

FORMAT_BY_SUFFIX = {
    ".yaml": "yaml",
    ".yml": "yaml",
    ".json": "json",
}


class ProjectDataLocator:
    """Finds the project data file without parsing it"""

    def find(self, cwd: Union[str, Path]) -> Optional[ProjectDataFile]:
        """
        Locate the project data file

        Args:
            cwd: Project directory

        Returns:
            ProjectDataFile for the first candidate present, or None
        """
        path = PathResolver(cwd).find_first(PROJECT_DATA_FILES)
        if path is None:
            logger.debug(f"No project data file in {cwd}")
            return None

        return ProjectDataFile(path=path, format=FORMAT_BY_SUFFIX[path.suffix])

    def supported_file_names(self) -> List[str]:
        """File names searched, in priority order"""
        return list(PROJECT_DATA_FILES)
