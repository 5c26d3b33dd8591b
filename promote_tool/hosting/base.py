# promote_tool/hosting/base.py
"""Hosting platform abstract base class"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional


class HostingPlatform(ABC):
    """Abstract base class for serverless hosting platforms"""

    @abstractmethod
    async def deploy(self, manifest_path: Path, version: Optional[str] = None) -> None:
        """
        Deploy a manifest

        Args:
            manifest_path: app.yaml or dispatch.yaml to deploy
            version: Version id to deploy under (service manifests only)

        Raises:
            PlatformError: If the deploy fails
        """
        pass

    @abstractmethod
    async def list_versions(self, service: str) -> List[str]:
        """
        List deployed version ids of a service, newest first by creation time

        Raises:
            PlatformError: If the listing fails
        """
        pass

    @abstractmethod
    async def delete_versions(self, service: str, versions: List[str]) -> None:
        """
        Delete versions of a service in one request

        Raises:
            PlatformError: If the deletion fails
        """
        pass

    @abstractmethod
    async def get_active_project(self) -> str:
        """
        Get the currently active project identity

        Raises:
            PlatformQueryFailedError: If it cannot be read
        """
        pass

    @abstractmethod
    async def describe_project(self, project_id: str) -> bool:
        """Check that a project exists and is accessible"""
        pass

    @abstractmethod
    async def is_app_enabled(self) -> bool:
        """Check that the hosting feature is enabled in the active project"""
        pass

    @abstractmethod
    async def can_list_versions(self) -> bool:
        """Check that the account may enumerate deployed versions"""
        pass
