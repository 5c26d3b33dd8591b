"""Path resolution for the staging tree"""

from pathlib import Path
from typing import Union

from ..constants import (
    TEMP_DIR_NAME,
    ARCHIVES_DIR_NAME,
    MAINTENANCE_DIR_NAME,
)
from ..models.release import StagingTree


class PathResolver:
    """Resolves staging paths below the downloads root

    Layout:

        <downloads>/<env>/<tag>/<repo>-<package>-<tag>/app.yaml
        <downloads>/<env>/<tag>/dispatch.yaml
        <downloads>/<env>/maintenance/dispatch.yaml
    """

    def __init__(self, downloads_dir: Union[str, Path]):
        """Initialize path resolver

        Args:
            downloads_dir: Root directory of all staging trees
        """
        self.downloads_dir = Path(downloads_dir)

    def get_environment_dir(self, environment: str) -> Path:
        return self.downloads_dir / environment

    def get_release_dir(self, environment: str, tag: str) -> Path:
        """Get the staging root of one (environment, tag) pair"""
        return self.get_environment_dir(environment) / str(tag)

    def get_staging_tree(self, environment: str, tag: str) -> StagingTree:
        """Get the staging tree of one (environment, tag) pair"""
        root = self.get_release_dir(environment, tag)
        return StagingTree(
            environment=environment,
            tag=str(tag),
            root=root,
            temp_dir=root / TEMP_DIR_NAME,
            archives_dir=root / ARCHIVES_DIR_NAME
        )

    def get_service_dir(self, environment: str, tag: str, asset_base_name: str) -> Path:
        """Get the extracted artifact directory of a service

        Args:
            environment: Environment name
            tag: Release tag
            asset_base_name: <repo>-<package>-<tag>
        """
        return self.get_release_dir(environment, tag) / asset_base_name

    def get_maintenance_dir(self, environment: str) -> Path:
        """Get the directory holding the maintenance dispatch manifest"""
        return self.get_environment_dir(environment) / MAINTENANCE_DIR_NAME
