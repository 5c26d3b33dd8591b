# promote_tool/repository/github.py
"""GitHub releases backend"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Dict

import aiofiles
import aiohttp

from .base import ArtifactRepository
from ..api.exceptions import ReleaseNotFoundError, TransientFetchError
from ..constants import (
    DEFAULT_GITHUB_API,
    DEFAULT_CHUNK_SIZE,
    METADATA_CONNECT_TIMEOUT,
    METADATA_TOTAL_TIMEOUT,
    DOWNLOAD_CONNECT_TIMEOUT,
    DOWNLOAD_TOTAL_TIMEOUT,
)
from ..models.release import Release, Asset
from ..utils.file_utils import remove_file

logger = logging.getLogger(__name__)


class GitHubRepository(ArtifactRepository):
    """Reads releases and downloads assets through the GitHub REST API"""

    def __init__(self,
                 owner: str,
                 repo: str,
                 token: Optional[str],
                 api_url: str = DEFAULT_GITHUB_API,
                 session: Optional[aiohttp.ClientSession] = None):
        """
        Initialize GitHub repository client

        Args:
            owner: Repository owner
            repo: Repository name
            token: Bearer token for the API
            api_url: API base URL
            session: Existing client session (owned by the caller)
        """
        self.owner = owner
        self.repo = repo
        self.token = token
        self.api_url = api_url.rstrip('/')
        self._session = session
        self._owns_session = session is None
        self.metadata_timeout = aiohttp.ClientTimeout(
            total=METADATA_TOTAL_TIMEOUT, connect=METADATA_CONNECT_TIMEOUT
        )
        self.download_timeout = aiohttp.ClientTimeout(
            total=DOWNLOAD_TOTAL_TIMEOUT, connect=DOWNLOAD_CONNECT_TIMEOUT
        )

    def _headers(self, accept: str) -> Dict[str, str]:
        headers = {"Accept": accept}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    def release_url(self, tag: str) -> str:
        return f"{self.api_url}/repos/{self.owner}/{self.repo}/releases/tags/{tag}"

    async def get_release(self, tag: str) -> Release:
        """Fetch release metadata by tag"""
        url = self.release_url(tag)
        session = await self._get_session()
        logger.debug(f"GET {url}")

        try:
            async with session.get(
                url,
                headers=self._headers("application/vnd.github+json"),
                timeout=self.metadata_timeout
            ) as response:
                if response.status == 404:
                    raise ReleaseNotFoundError(tag)
                if response.status != 200:
                    raise TransientFetchError(
                        f"Failed to fetch release information for {tag} (HTTP {response.status})",
                        status=response.status
                    )
                status = response.status
                try:
                    data = await response.json(content_type=None)
                    release = Release.from_dict(data)
                except (ValueError, KeyError, TypeError, AttributeError) as e:
                    raise TransientFetchError(
                        f"Invalid release metadata for {tag}: {str(e) or type(e).__name__}",
                        status=status
                    ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransientFetchError(
                f"Failed to fetch release information for {tag}: {str(e) or type(e).__name__}"
            ) from e

        if not release.tag:
            release.tag = tag
        return release

    async def download_asset(self, asset: Asset, destination: Path) -> int:
        """Stream asset content into destination"""
        session = await self._get_session()
        destination.parent.mkdir(parents=True, exist_ok=True)
        written = 0

        try:
            async with session.get(
                asset.url,
                headers=self._headers("application/octet-stream"),
                timeout=self.download_timeout
            ) as response:
                if response.status != 200:
                    raise TransientFetchError(
                        f"Failed to download {asset.name} (HTTP {response.status})",
                        status=response.status
                    )

                async with aiofiles.open(destination, 'wb') as f:
                    async for chunk in response.content.iter_chunked(DEFAULT_CHUNK_SIZE):
                        await f.write(chunk)
                        written += len(chunk)

        except TransientFetchError:
            remove_file(destination)
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            remove_file(destination)
            raise TransientFetchError(
                f"Failed to download {asset.name}: {str(e) or type(e).__name__}"
            ) from e

        if asset.size and written != asset.size:
            remove_file(destination)
            raise TransientFetchError(
                f"Incomplete download of {asset.name}: "
                f"received {written} of {asset.size} bytes"
            )

        return written

    async def close(self) -> None:
        """Close the owned client session"""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
