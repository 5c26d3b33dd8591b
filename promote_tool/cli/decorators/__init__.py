# promote_tool/cli/decorators/__init__.py
"""CLI decorators"""

from .options import phase_options, split_services

__all__ = [
    'phase_options',
    'split_services',
]
