"""
Shared fixtures for promote-tool tests.

Platform and repository backends are replaced with in-memory fakes so
tests never call gcloud or the network.
"""

import copy
import io
import zipfile
from pathlib import Path
from typing import Dict, List, Optional
from unittest.mock import AsyncMock

import pytest

from promote_tool.api.exceptions import ReleaseNotFoundError
from promote_tool.hosting.base import HostingPlatform
from promote_tool.models.config import DeploymentConfig
from promote_tool.models.release import Release, Asset
from promote_tool.repository.base import ArtifactRepository

TAG = "v1.2.3-build.4"

CONFIG_DATA = {
    "repo_owner": "acme",
    "repo_name": "shop",
    "github_token": "test-token",
    "keep_versions": 2,
    "gcp_projects": {
        "dev": "acme-dev",
        "stage": "acme-stage",
        "prod": "acme-prod",
    },
    "environments": {
        "stage": {
            "services": {
                "api": {
                    "app_yaml": {"service": "api", "runtime": "python39"},
                },
                "worker": {
                    "package_name": "jobs",
                    "app_yaml": {"service": "worker", "runtime": "python39"},
                },
                "maintenance": {
                    "app_yaml": {"service": "maintenance", "runtime": "python39"},
                },
            },
            "dispatch": {
                "maintenance": {
                    "dispatch": [{"url": "*/*", "service": "maintenance"}],
                },
                "services": {
                    "dispatch": [
                        {"url": "*/api/*", "service": "api"},
                        {"url": "*/jobs/*", "service": "worker"},
                    ],
                },
            },
        },
    },
}


def make_zip(files: Dict[str, str]) -> bytes:
    """Build an in-memory zip archive"""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in files.items():
            archive.writestr(name, content)
    return buffer.getvalue()


def mark_encrypted(archive: bytes) -> bytes:
    """Set the encryption flag on every local and central directory header"""
    data = bytearray(archive)
    for signature, flag_offset in ((b"PK\x03\x04", 6), (b"PK\x01\x02", 8)):
        start = data.find(signature)
        while start != -1:
            data[start + flag_offset] |= 0x01
            start = data.find(signature, start + 4)
    return bytes(data)


class FakeRepository(ArtifactRepository):
    """Serves a single release from memory"""

    def __init__(self, tag: str = TAG, assets: Optional[List[Asset]] = None,
                 contents: Optional[Dict[str, bytes]] = None):
        self.tag = tag
        self.assets = assets or []
        self.contents = contents or {}
        self.failures: Dict[str, Exception] = {}
        self.downloads: List[str] = []
        self.release_requests = 0
        self.closed = False

    def add_asset(self, name: str, content: bytes, size: Optional[int] = None) -> Asset:
        asset = Asset(name=name, url=f"https://example.test/{name}",
                      size=len(content) if size is None else size)
        self.assets.append(asset)
        self.contents[name] = content
        return asset

    async def get_release(self, tag: str) -> Release:
        self.release_requests += 1
        if tag != self.tag:
            raise ReleaseNotFoundError(tag)
        return Release(tag=tag, assets=list(self.assets))

    async def download_asset(self, asset, destination: Path) -> int:
        self.downloads.append(asset.name)
        destination.parent.mkdir(parents=True, exist_ok=True)
        content = self.contents[asset.name]
        if asset.name in self.failures:
            destination.write_bytes(content[:1])
            raise self.failures[asset.name]
        destination.write_bytes(content)
        return len(content)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def config_data():
    """Raw configuration document"""
    return copy.deepcopy(CONFIG_DATA)


@pytest.fixture
def config(tmp_path, config_data) -> DeploymentConfig:
    """Configuration with downloads rooted in tmp_path"""
    return DeploymentConfig.from_dict(config_data, base_dir=tmp_path)


@pytest.fixture
def repository() -> FakeRepository:
    """Release with one archive per configured service"""
    repo = FakeRepository()
    repo.add_asset(f"shop-api-{TAG}.zip", make_zip({"main.py": "print('api')"}))
    repo.add_asset(f"shop-jobs-{TAG}.zip", make_zip({"main.py": "print('jobs')"}))
    return repo


@pytest.fixture
def platform():
    """Platform whose active project is the stage project"""
    mock = AsyncMock(spec=HostingPlatform)
    mock.get_active_project.return_value = "acme-stage"
    mock.describe_project.return_value = True
    mock.is_app_enabled.return_value = True
    mock.can_list_versions.return_value = True
    mock.list_versions.return_value = []
    mock.deploy.return_value = None
    mock.delete_versions.return_value = None
    return mock


@pytest.fixture
def stage_release_dir(config) -> Path:
    """Staging root for the stage environment and the default tag"""
    return config.downloads_dir / "stage" / TAG


@pytest.fixture
def staged_services(stage_release_dir) -> Dict[str, Path]:
    """Extracted service directories as left by prepare-release"""
    dirs = {
        "api": stage_release_dir / f"shop-api-{TAG}",
        "worker": stage_release_dir / f"shop-jobs-{TAG}",
    }
    for path in dirs.values():
        path.mkdir(parents=True)
        (path / "main.py").write_text("print('hello')")
    return dirs
