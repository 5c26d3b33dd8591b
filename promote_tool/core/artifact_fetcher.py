"""Sequential download and extraction of release assets"""

import logging
import time
import zipfile
import zlib
from typing import Callable, Optional

from ..api.exceptions import IntegrityError, TransientFetchError
from ..core.path_resolver import PathResolver
from ..models.release import ReleaseTag, AssetSet, Asset, StagingTree
from ..models.result import FetchResult, FetchProgress, OperationStatus
from ..repository.base import ArtifactRepository
from ..utils.async_utils import run_blocking
from ..utils.file_utils import (
    verify_zip_archive,
    extract_zip_archive,
    move_file,
    remove_file,
    remove_tree,
)
from ..utils.formatting import format_size

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[FetchProgress], None]


class ArtifactFetcher:
    """Downloads assets one at a time into the staging tree

    The first failing asset stops the fetch. Directories extracted before
    it are kept; ``.temp/`` and ``archives/`` are always removed.
    """

    def __init__(self,
                 repository: ArtifactRepository,
                 path_resolver: PathResolver,
                 progress_callback: Optional[ProgressCallback] = None):
        self.repository = repository
        self.path_resolver = path_resolver
        self.progress_callback = progress_callback

    async def fetch(self, tag: ReleaseTag, environment: str, asset_set: AssetSet) -> FetchResult:
        """
        Fetch every asset of an asset set

        Args:
            tag: Release tag
            environment: Target environment
            asset_set: Resolved assets, downloaded in their listing order

        Returns:
            FetchResult describing how far the fetch got
        """
        staging = self.path_resolver.get_staging_tree(environment, str(tag))
        assets = list(asset_set.assets)
        total_bytes = asset_set.total_bytes

        result = FetchResult(
            tag=str(tag),
            environment=environment,
            staging_dir=staging.root,
            total_assets=len(assets),
            total_bytes=total_bytes
        )

        logger.info(
            f"Downloading assets for release: {tag} (Environment: {environment})"
        )
        logger.info(f"Found {len(assets)} assets, total size: {format_size(total_bytes)}")

        for directory in (staging.root, staging.temp_dir, staging.archives_dir):
            directory.mkdir(parents=True, exist_ok=True)

        current: Optional[Asset] = None
        try:
            for index, asset in enumerate(assets, start=1):
                current = asset
                await self._fetch_asset(staging, asset, index, len(assets), result)
                result.completed_assets.append(asset.name)
                self._report_progress(FetchProgress(
                    current=index,
                    total=len(assets),
                    name=asset.name,
                    size=asset.size,
                    downloaded_bytes=result.downloaded_bytes,
                    total_bytes=total_bytes
                ))

        except (TransientFetchError, IntegrityError) as e:
            result.failed_asset = current.name if current else None
            result.add_error(
                e.error_code,
                str(e),
                asset=result.failed_asset,
                status=getattr(e, 'status', None)
            )
            result.message = str(e)
            logger.error(str(e))
            result.complete(OperationStatus.FAILED)

        finally:
            remove_tree(staging.temp_dir)
            remove_tree(staging.archives_dir)

        if not result.is_failed:
            result.message = (
                f"Successfully downloaded all assets (Total: {format_size(total_bytes)})"
            )
            logger.info(result.message)
            logger.info(f"All packages are stored in: {staging.root}")
            result.complete(OperationStatus.SUCCESS)

        return result

    async def _fetch_asset(self, staging: StagingTree, asset: Asset,
                           index: int, total: int, result: FetchResult) -> None:
        """Download, verify and extract one asset"""
        temp_file = staging.temp_dir / asset.name
        archive_file = staging.archives_dir / asset.name

        logger.info(f"Downloading asset {index}/{total}: {asset.name} ({format_size(asset.size)})")

        started = time.monotonic()
        try:
            written = await self.repository.download_asset(asset, temp_file)
        except TransientFetchError:
            remove_file(temp_file)
            raise
        elapsed = max(time.monotonic() - started, 1e-6)

        result.downloaded_bytes += asset.size
        logger.info(f"Successfully downloaded {asset.name} ({format_size(written / elapsed)}/s)")

        move_file(temp_file, archive_file)

        if not asset.is_archive:
            logger.warning(f"{asset.name} is not a zip archive, skipping extraction")
            return

        problem = await run_blocking(verify_zip_archive, archive_file)
        if problem:
            raise IntegrityError(f"Invalid or corrupted zip file: {asset.name} ({problem})")

        target_dir = staging.asset_dir(asset)
        try:
            await run_blocking(extract_zip_archive, archive_file, target_dir)
        except (zipfile.BadZipFile, OSError, RuntimeError, NotImplementedError,
                ValueError, EOFError, zlib.error) as e:
            raise IntegrityError(f"Failed to extract {asset.name}: {e}") from e

        if target_dir not in result.extracted_dirs:
            result.extracted_dirs.append(target_dir)
        logger.info(f"Successfully extracted {asset.name} to {target_dir}")

    def _report_progress(self, progress: FetchProgress) -> None:
        logger.info(
            f"Total progress: [{progress.percent}%] "
            f"[{progress.downloaded_bytes}/{progress.total_bytes} bytes]"
        )
        if self.progress_callback:
            self.progress_callback(progress)
