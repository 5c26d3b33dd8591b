# promote_tool/utils/file_utils.py
"""File operation utilities"""

import logging
import shutil
import zipfile
import zlib
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def verify_zip_archive(archive_path: Path) -> Optional[str]:
    """
    Test integrity of a zip archive

    Args:
        archive_path: Path to the archive

    Returns:
        None if the archive is sound, otherwise a description of the problem
    """
    try:
        with zipfile.ZipFile(archive_path) as archive:
            bad_member = archive.testzip()
    except (zipfile.BadZipFile, OSError, RuntimeError, NotImplementedError,
            ValueError, EOFError, zlib.error) as e:
        return str(e) or type(e).__name__

    if bad_member is not None:
        return f"CRC check failed for member: {bad_member}"
    return None


def extract_zip_archive(archive_path: Path, target_dir: Path) -> int:
    """
    Extract a zip archive, overwriting existing files

    Args:
        archive_path: Path to the archive
        target_dir: Extraction directory (created if missing)

    Returns:
        Number of extracted members
    """
    target_dir.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(archive_path) as archive:
        members = archive.infolist()
        archive.extractall(target_dir)
    return len(members)


def move_file(source: Path, target: Path) -> Path:
    """Move a file, replacing any existing target"""
    target.parent.mkdir(parents=True, exist_ok=True)
    if target.exists():
        target.unlink()
    return Path(shutil.move(str(source), str(target)))


def remove_file(path: Path) -> None:
    """Remove a file if it exists"""
    try:
        path.unlink()
    except FileNotFoundError:
        pass


def remove_tree(path: Path) -> None:
    """Remove a directory tree if it exists"""
    if path.exists():
        shutil.rmtree(path, ignore_errors=False)
        logger.debug(f"Removed {path}")
