"""Project data file model"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ProjectDataFile:
    """Location and format of the project data file"""

    path: Path
    format: str  # yaml or json
