"""Utility functions for promote-tool"""

from .formatting import format_size, format_duration, pluralize
from .async_utils import run_async, run_blocking
from .file_utils import (
    verify_zip_archive,
    extract_zip_archive,
    move_file,
    remove_file,
    remove_tree,
)

__all__ = [
    "format_size",
    "format_duration",
    "pluralize",
    "run_async",
    "run_blocking",
    "verify_zip_archive",
    "extract_zip_archive",
    "move_file",
    "remove_file",
    "remove_tree",
]
