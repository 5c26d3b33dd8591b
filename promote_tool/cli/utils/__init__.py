"""CLI utility functions"""

from .progress import DownloadProgress
from .output import (
    format_error,
    format_prepare_result,
    format_deploy_result,
    format_dispatch_result,
)

__all__ = [
    # Progress utilities
    'DownloadProgress',

    # Output utilities
    'format_error',
    'format_prepare_result',
    'format_deploy_result',
    'format_dispatch_result',
]
