"""Service and dispatch manifest generation"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml

from ..api.exceptions import (
    ManifestMissingError,
    ServiceNameMismatchError,
    RuntimeUnspecifiedError,
)
from ..constants import APP_MANIFEST_FILE, DISPATCH_MANIFEST_FILE
from ..models.config import DeploymentConfig

logger = logging.getLogger(__name__)


@dataclass
class GeneratedManifest:
    """A manifest written to disk"""
    path: Path
    content: Dict[str, Any]
    key: str


class ManifestEngine:
    """Writes app.yaml and dispatch.yaml from configuration fragments"""

    def __init__(self, config: DeploymentConfig):
        self.config = config

    def write_service_manifest(self, environment: str, service: str,
                               target_dir: Path) -> GeneratedManifest:
        """
        Write app.yaml for a service and check its declared identity

        Args:
            environment: Environment name
            service: Service name
            target_dir: Directory receiving app.yaml

        Returns:
            GeneratedManifest

        Raises:
            ManifestMissingError: If the fragment is absent or empty
            ServiceNameMismatchError: If the declared service differs
            RuntimeUnspecifiedError: If no runtime is declared
        """
        key = f"environments.{environment}.services.{service}.app_yaml"
        service_config = self.config.get_environment(environment).get_service(service)
        fragment = service_config.app_yaml if service_config else None

        manifest = self._write(fragment, key, environment, target_dir / APP_MANIFEST_FILE)

        written = self._read(manifest.path)
        declared = written.get("service")
        if declared != service:
            raise ServiceNameMismatchError(service, declared)

        runtime = written.get("runtime")
        if runtime is None or not str(runtime).strip():
            raise RuntimeUnspecifiedError(service)

        logger.info(f"Created app.yaml for service {service} in {manifest.path}")
        return manifest

    def write_dispatch_manifest(self, environment: str, scope: str,
                                target_dir: Path) -> GeneratedManifest:
        """
        Write dispatch.yaml for a dispatch scope

        Args:
            environment: Environment name
            scope: 'maintenance' or 'services'
            target_dir: Directory receiving dispatch.yaml

        Raises:
            ManifestMissingError: If the fragment is absent or empty
        """
        key = f"environments.{environment}.dispatch.{scope}"
        fragment = self.config.get_environment(environment).dispatch.get(scope)

        manifest = self._write(fragment, key, environment, target_dir / DISPATCH_MANIFEST_FILE)
        logger.info(f"Created dispatch.yaml for {scope} in {manifest.path}")
        return manifest

    def _write(self, fragment: Any, key: str, environment: str, path: Path) -> GeneratedManifest:
        if not fragment:
            raise ManifestMissingError(key, environment)

        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            yaml.safe_dump(fragment, f, default_flow_style=False, sort_keys=False)

        return GeneratedManifest(path=path, content=fragment, key=key)

    @staticmethod
    def _read(path: Path) -> Dict[str, Any]:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return data if isinstance(data, dict) else {}
