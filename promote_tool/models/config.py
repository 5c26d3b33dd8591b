"""Configuration data models"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Any

from ..constants import (
    DEFAULT_KEEP_VERSIONS,
    DEFAULT_GITHUB_API,
    DEFAULT_DOWNLOADS_DIR,
    MAINTENANCE_SCOPE,
)


@dataclass(frozen=True)
class ServiceConfig:
    """Per-environment configuration of one deployable service"""

    name: str
    package_name: str
    app_yaml: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, name: str, data: Optional[Dict[str, Any]]) -> 'ServiceConfig':
        """Create from dictionary"""
        data = data or {}
        return cls(
            name=name,
            package_name=data.get("package_name") or name,
            app_yaml=data.get("app_yaml")
        )


@dataclass(frozen=True)
class EnvironmentConfig:
    """Services and dispatch rules of one environment"""

    name: str
    services: Dict[str, ServiceConfig] = field(default_factory=dict)
    dispatch: Dict[str, Any] = field(default_factory=dict)

    @property
    def service_names(self) -> List[str]:
        """Deployable services in configuration order

        The reserved maintenance entry is not a deployable service.
        """
        return [name for name in self.services if name != MAINTENANCE_SCOPE]

    def get_service(self, name: str) -> Optional[ServiceConfig]:
        return self.services.get(name)

    @classmethod
    def from_dict(cls, name: str, data: Optional[Dict[str, Any]]) -> 'EnvironmentConfig':
        """Create from dictionary"""
        data = data or {}
        services = {
            service_name: ServiceConfig.from_dict(service_name, service_data)
            for service_name, service_data in (data.get("services") or {}).items()
        }
        return cls(
            name=name,
            services=services,
            dispatch=dict(data.get("dispatch") or {})
        )


@dataclass(frozen=True)
class DeploymentConfig:
    """Complete promotion configuration, built once at startup"""

    repo_owner: str
    repo_name: str
    github_token: Optional[str] = None
    keep_versions: int = DEFAULT_KEEP_VERSIONS
    github_api: str = DEFAULT_GITHUB_API
    downloads_dir: Path = Path(DEFAULT_DOWNLOADS_DIR)
    projects: Dict[str, str] = field(default_factory=dict)
    environments: Dict[str, EnvironmentConfig] = field(default_factory=dict)
    config_path: Optional[Path] = None

    def get_environment(self, name: str) -> EnvironmentConfig:
        """Get an environment, empty if not configured"""
        return self.environments.get(name) or EnvironmentConfig(name=name)

    def get_project(self, environment: str) -> Optional[str]:
        return self.projects.get(environment) or None

    def package_name(self, environment: str, service: str) -> str:
        """Package name of a service, defaulting to the service name"""
        service_config = self.get_environment(environment).get_service(service)
        if service_config is None:
            return service
        return service_config.package_name

    def asset_prefix(self, package_name: str) -> str:
        """Prefix every asset of a package starts with"""
        return f"{self.repo_name}-{package_name}-"

    def asset_base_name(self, package_name: str, tag: str) -> str:
        """Expected asset (and extraction directory) name"""
        return f"{self.repo_name}-{package_name}-{tag}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Path,
                  config_path: Optional[Path] = None,
                  github_token: Optional[str] = None) -> 'DeploymentConfig':
        """Create from an already validated dictionary

        Args:
            data: Parsed configuration document
            base_dir: Directory relative download paths are resolved against
            config_path: Source file of the configuration
            github_token: Token used when the document does not set one
        """
        downloads = Path(data.get("directories") or DEFAULT_DOWNLOADS_DIR).expanduser()
        if not downloads.is_absolute():
            downloads = base_dir / downloads

        keep_versions = data.get("keep_versions")
        if keep_versions is None:
            keep_versions = DEFAULT_KEEP_VERSIONS

        return cls(
            repo_owner=data["repo_owner"],
            repo_name=data["repo_name"],
            github_token=data.get("github_token") or github_token,
            keep_versions=int(keep_versions),
            github_api=(data.get("github_api") or DEFAULT_GITHUB_API).rstrip("/"),
            downloads_dir=downloads,
            projects={
                env: project for env, project in (data.get("gcp_projects") or {}).items()
                if project
            },
            environments={
                name: EnvironmentConfig.from_dict(name, env_data)
                for name, env_data in (data.get("environments") or {}).items()
            },
            config_path=config_path
        )
