"""Tests for downloading and extracting release assets"""

import pytest

from promote_tool.api.exceptions import TransientFetchError
from promote_tool.constants import ErrorCode
from promote_tool.core.artifact_fetcher import ArtifactFetcher
from promote_tool.core.path_resolver import PathResolver
from promote_tool.models.release import ReleaseTag, AssetSet

from conftest import TAG, FakeRepository, make_zip, mark_encrypted

RELEASE = "v2.0.0-build.7"


@pytest.fixture
def progress_events():
    return []


@pytest.fixture
def repository():
    repo = FakeRepository(tag=RELEASE)
    repo.add_asset(f"shop-api-{RELEASE}.zip", make_zip({"main.py": "api"}), size=1048576)
    repo.add_asset(f"shop-jobs-{RELEASE}.zip", make_zip({"main.py": "jobs"}), size=2097152)
    return repo


@pytest.fixture
def fetcher(config, repository, progress_events):
    return ArtifactFetcher(repository, PathResolver(config.downloads_dir), progress_events.append)


def asset_set_for(repository, tag=RELEASE):
    return AssetSet(tag=ReleaseTag(tag), services=["api", "worker"], assets=list(repository.assets))


@pytest.fixture
def release_dir(config):
    return config.downloads_dir / "stage" / RELEASE


@pytest.mark.asyncio
async def test_fetch_extracts_every_asset(fetcher, repository, release_dir, progress_events):
    result = await fetcher.fetch(ReleaseTag(RELEASE), "stage", asset_set_for(repository))

    assert result.is_success
    assert result.total_bytes == 3145728
    assert "3MB" in result.message
    assert result.staging_dir == release_dir
    assert result.extracted_dirs == [
        release_dir / f"shop-api-{RELEASE}",
        release_dir / f"shop-jobs-{RELEASE}",
    ]
    assert (release_dir / f"shop-jobs-{RELEASE}" / "main.py").read_text() == "jobs"
    assert not (release_dir / ".temp").exists()
    assert not (release_dir / "archives").exists()
    assert sorted(p.name for p in release_dir.iterdir()) == [
        f"shop-api-{RELEASE}", f"shop-jobs-{RELEASE}"
    ]

    assert [(p.current, p.total) for p in progress_events] == [(1, 2), (2, 2)]
    assert [p.percent for p in progress_events] == [33, 100]


@pytest.mark.asyncio
async def test_failure_keeps_earlier_extractions(fetcher, repository, release_dir):
    repository.failures[f"shop-jobs-{RELEASE}.zip"] = TransientFetchError(
        "Failed to download (HTTP 502)", status=502
    )

    result = await fetcher.fetch(ReleaseTag(RELEASE), "stage", asset_set_for(repository))

    assert result.is_failed
    assert result.failed_asset == f"shop-jobs-{RELEASE}.zip"
    assert result.completed_assets == [f"shop-api-{RELEASE}.zip"]
    assert result.extracted_dirs == [release_dir / f"shop-api-{RELEASE}"]
    assert result.error.code == ErrorCode.TRANSIENT_FETCH
    assert result.error.context["status"] == 502
    assert (release_dir / f"shop-api-{RELEASE}").is_dir()
    assert not (release_dir / f"shop-jobs-{RELEASE}").exists()
    assert not (release_dir / ".temp").exists()
    assert not (release_dir / "archives").exists()


@pytest.mark.asyncio
async def test_failure_stops_remaining_downloads(config, release_dir):
    repository = FakeRepository(tag=RELEASE)
    for name in ("a", "b", "c"):
        repository.add_asset(f"shop-{name}-{RELEASE}.zip", make_zip({"f": name}))
    repository.failures[f"shop-b-{RELEASE}.zip"] = TransientFetchError("reset")
    fetcher = ArtifactFetcher(repository, PathResolver(config.downloads_dir))

    result = await fetcher.fetch(ReleaseTag(RELEASE), "stage", asset_set_for(repository))

    assert result.is_failed
    assert repository.downloads == [f"shop-a-{RELEASE}.zip", f"shop-b-{RELEASE}.zip"]


@pytest.mark.asyncio
async def test_corrupt_archive(config, release_dir):
    repository = FakeRepository(tag=RELEASE)
    repository.add_asset(f"shop-api-{RELEASE}.zip", b"this is not a zip file")
    fetcher = ArtifactFetcher(repository, PathResolver(config.downloads_dir))

    result = await fetcher.fetch(ReleaseTag(RELEASE), "stage", asset_set_for(repository))

    assert result.is_failed
    assert result.error.code == ErrorCode.INTEGRITY_FAILED
    assert "corrupted" in result.message
    assert not (release_dir / f"shop-api-{RELEASE}").exists()
    assert not (release_dir / "archives").exists()


@pytest.mark.asyncio
async def test_non_archive_asset_is_not_extracted(config, release_dir):
    repository = FakeRepository(tag=RELEASE)
    repository.add_asset(f"shop-api-{RELEASE}.tar.gz", b"tarball")
    fetcher = ArtifactFetcher(repository, PathResolver(config.downloads_dir))

    result = await fetcher.fetch(ReleaseTag(RELEASE), "stage", asset_set_for(repository))

    assert result.is_success
    assert result.extracted_dirs == []
    assert result.completed_assets == [f"shop-api-{RELEASE}.tar.gz"]


@pytest.mark.asyncio
async def test_fetch_is_repeatable(fetcher, repository, release_dir):
    first = await fetcher.fetch(ReleaseTag(RELEASE), "stage", asset_set_for(repository))
    second = await fetcher.fetch(ReleaseTag(RELEASE), "stage", asset_set_for(repository))

    assert first.is_success and second.is_success
    assert first.extracted_dirs == second.extracted_dirs
    assert (release_dir / f"shop-api-{RELEASE}" / "main.py").read_text() == "api"


@pytest.mark.asyncio
async def test_zero_byte_release(config, progress_events):
    repository = FakeRepository(tag=TAG)
    repository.add_asset(f"shop-api-{TAG}.zip", make_zip({"f": "x"}), size=0)
    fetcher = ArtifactFetcher(repository, PathResolver(config.downloads_dir), progress_events.append)

    result = await fetcher.fetch(ReleaseTag(TAG), "stage", asset_set_for(repository, TAG))

    assert result.is_success
    assert result.total_bytes == 0
    assert "0B" in result.message
    assert progress_events[-1].percent == 100


@pytest.mark.asyncio
async def test_encrypted_archive_is_integrity_failure(config, release_dir):
    repository = FakeRepository(tag=RELEASE)
    repository.add_asset(f"shop-api-{RELEASE}.zip",
                         mark_encrypted(make_zip({"main.py": "api"})))
    fetcher = ArtifactFetcher(repository, PathResolver(config.downloads_dir))

    result = await fetcher.fetch(ReleaseTag(RELEASE), "stage", asset_set_for(repository))

    assert result.is_failed
    assert result.error.code == ErrorCode.INTEGRITY_FAILED
    assert "encrypted" in result.message
    assert result.failed_asset == f"shop-api-{RELEASE}.zip"
    assert not (release_dir / f"shop-api-{RELEASE}").exists()
    assert not (release_dir / "archives").exists()
