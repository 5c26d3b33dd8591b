"""Configuration loading service"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..api.exceptions import ConfigError
from ..constants import (
    DEFAULT_CONFIG_FILE,
    ENV_GITHUB_TOKEN,
    PROJECT_ENVIRONMENTS,
)
from ..core.validation_engine import ValidationEngine
from ..models.config import DeploymentConfig

logger = logging.getLogger(__name__)

_MAPPING_OR_NULL = {"type": ["object", "null"]}

CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["repo_owner", "repo_name"],
    "properties": {
        "repo_owner": {"type": "string", "minLength": 1},
        "repo_name": {"type": "string", "minLength": 1},
        "github_token": {"type": ["string", "null"]},
        "github_api": {"type": ["string", "null"]},
        "keep_versions": {"type": ["integer", "null"], "minimum": 1},
        "directories": {"type": ["string", "null"]},
        "gcp_projects": {
            "type": ["object", "null"],
            "properties": {
                env: {"type": ["string", "null"]} for env in PROJECT_ENVIRONMENTS
            },
            "additionalProperties": False
        },
        "environments": {
            "type": ["object", "null"],
            "additionalProperties": {
                "type": ["object", "null"],
                "properties": {
                    "services": {
                        "type": ["object", "null"],
                        "additionalProperties": {
                            "type": ["object", "null"],
                            "properties": {
                                "package_name": {"type": ["string", "null"]},
                                "app_yaml": _MAPPING_OR_NULL
                            }
                        }
                    },
                    "dispatch": {
                        "type": ["object", "null"],
                        "additionalProperties": _MAPPING_OR_NULL
                    }
                }
            }
        }
    }
}


class ConfigService:
    """Loads and validates the deployment configuration file"""

    def __init__(self,
                 config_path: Union[str, Path] = DEFAULT_CONFIG_FILE,
                 base_dir: Optional[Path] = None):
        """Initialize config service

        Args:
            config_path: Configuration file, relative paths resolved against base_dir
            base_dir: Working directory (defaults to the current directory)
        """
        self.base_dir = Path(base_dir) if base_dir else Path.cwd()
        config_path = Path(config_path).expanduser()
        if not config_path.is_absolute():
            config_path = self.base_dir / config_path
        self.config_path = config_path
        self.validation_engine = ValidationEngine()
        self._config: Optional[DeploymentConfig] = None

    @property
    def config(self) -> DeploymentConfig:
        """Get current configuration (lazy load)"""
        if self._config is None:
            self.load_config()
        return self._config

    def load_config(self) -> DeploymentConfig:
        """Load configuration from file

        Returns:
            Loaded configuration

        Raises:
            ConfigError: If the file is missing, unparsable or invalid
        """
        if not self.config_path.is_file():
            raise ConfigError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path, 'r') as f:
            content = f.read()

        # Simple environment variable expansion
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse {self.config_path}: {e}") from e

        self._config = self.build_config(data)
        logger.debug(f"Loaded configuration from {self.config_path}")
        return self._config

    def build_config(self, data: Any) -> DeploymentConfig:
        """Validate a parsed document and build the configuration value"""
        validation = self.validation_engine.validate_config(data, CONFIG_SCHEMA)
        if not validation.is_valid:
            raise ConfigError(
                f"Invalid configuration in {self.config_path}:\n  "
                + "\n  ".join(validation.errors)
            )

        projects = {
            env: project for env, project in (data.get("gcp_projects") or {}).items()
            if project
        }
        seen: Dict[str, str] = {}
        for env, project in projects.items():
            if project in seen:
                raise ConfigError(
                    f"Environments '{seen[project]}' and '{env}' share GCP project '{project}'"
                )
            seen[project] = env

        return DeploymentConfig.from_dict(
            data,
            base_dir=self.base_dir,
            config_path=self.config_path,
            github_token=os.environ.get(ENV_GITHUB_TOKEN)
        )


def load_config(config_path: Union[str, Path] = DEFAULT_CONFIG_FILE,
                base_dir: Optional[Path] = None) -> DeploymentConfig:
    """Load a deployment configuration file"""
    return ConfigService(config_path, base_dir).load_config()
