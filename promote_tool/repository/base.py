# promote_tool/repository/base.py
"""Artifact repository abstract base class"""

from abc import ABC, abstractmethod
from pathlib import Path

from ..models.release import Release, Asset


class ArtifactRepository(ABC):
    """Abstract base class for release artifact sources"""

    @abstractmethod
    async def get_release(self, tag: str) -> Release:
        """
        Fetch release metadata by tag

        Args:
            tag: Release tag

        Returns:
            Release with its assets in listing order

        Raises:
            ReleaseNotFoundError: If the tag does not exist
            TransientFetchError: For any other failure
        """
        pass

    @abstractmethod
    async def download_asset(self, asset: Asset, destination: Path) -> int:
        """
        Download asset content to a local file

        The destination file is removed if the download fails.

        Args:
            asset: Asset to download
            destination: Local file path

        Returns:
            Number of bytes written

        Raises:
            TransientFetchError: On HTTP, network, timeout or size verification failure
        """
        pass

    async def close(self) -> None:
        """Release network resources"""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
