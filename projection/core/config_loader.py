"""Loading of the generator configuration file"""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

import jsonschema
import yaml

from ..api.exceptions import ConfigError
from ..constants import EMBEDDED_CONFIG_KEY, PROJECT_CONFIG_FILES, PROJECT_DATA_FILES
from ..models.config import ProjectConfig
from .path_resolver import PathResolver

logger = logging.getLogger(__name__)

# Only the deploy relevant keys are checked, everything else belongs to the
# site generator and passes through untouched.
CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "baseUrl": {"type": "string"},
        "output": {"type": "string"},
        "homepage": {"type": ["string", "null"]},
        "deployBranch": {"type": "string"},
        "buildCommand": {"type": "string"},
    },
}


class ConfigLoader:
    """Loads the project configuration with the following priority:

    1. Explicit config path
    2. projection.config.json / .yaml / .yml in the project root
    3. ``config`` section embedded in the project data file
    4. Defaults
    """

    def __init__(self, project_root: Union[str, Path]):
        self.path_resolver = PathResolver(project_root)

    def load(self, config_path: Optional[Union[str, Path]] = None) -> ProjectConfig:
        """
        Load and validate the configuration

        Args:
            config_path: Explicit configuration file (relative to project root)

        Returns:
            ProjectConfig

        Raises:
            ConfigError: If a file is missing, unreadable or invalid
        """
        if config_path:
            path = self.path_resolver.resolve(config_path)
            if not path.is_file():
                raise ConfigError(
                    f"Configuration file not found: {config_path}",
                    solution="Check the --config option"
                )
            return self._build(self._load_file(path), path)

        path = self.path_resolver.find_first(PROJECT_CONFIG_FILES)
        if path:
            return self._build(self._load_file(path), path)

        embedded = self._load_embedded()
        if embedded is not None:
            data, path = embedded
            return self._build(data, path)

        logger.debug("No configuration file found, using defaults")
        return ProjectConfig()

    def validate(self, data: Any) -> List[str]:
        """
        Validate raw configuration against the schema

        Args:
            data: Parsed configuration

        Returns:
            List of error messages (empty when valid)
        """
        validator = jsonschema.Draft7Validator(CONFIG_SCHEMA)
        errors = []
        for error in sorted(validator.iter_errors(data), key=lambda e: list(e.path)):
            location = ".".join(str(p) for p in error.path)
            errors.append(f"{location}: {error.message}" if location else error.message)
        return errors

    def _build(self, data: Any, source: Path) -> ProjectConfig:
        if data is None:
            data = {}

        errors = self.validate(data)
        if errors:
            raise ConfigError(
                f"Invalid configuration in {source.name}",
                solution="Fix the listed configuration values",
                errors=errors
            )

        logger.info(f"Loaded configuration from {source}")
        return ProjectConfig.from_dict(data, source=source)

    def _load_file(self, path: Path) -> Any:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read()
        except OSError as e:
            raise ConfigError(f"Cannot read configuration file {path}", errors=[str(e)])

        try:
            if path.suffix == '.json':
                return json.loads(content)
            if path.suffix in ('.yaml', '.yml'):
                return yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigError(
                f"Failed to parse configuration file: {path.name}",
                solution="Check the file syntax",
                errors=[str(e)]
            )

        raise ConfigError(
            f"Unsupported config file format: {path.suffix}",
            solution="Use a .json, .yaml or .yml configuration file"
        )

    def _load_embedded(self) -> Optional[tuple]:
        for name in PROJECT_DATA_FILES:
            path = self.path_resolver.project_root / name
            if not path.is_file():
                continue

            # Broken project data is reported by the build, not here
            try:
                data = self._load_file(path)
            except ConfigError as e:
                logger.debug(f"Skipping embedded config in {name}: {e}")
                continue

            if isinstance(data, dict) and data.get(EMBEDDED_CONFIG_KEY):
                return data[EMBEDDED_CONFIG_KEY], path

        return None
