"""Formatting utilities for display"""

from typing import Union


def format_size(size_bytes: Union[int, float]) -> str:
    """Format byte size with base-1024 units, truncating to whole units

    Args:
        size_bytes: Size in bytes

    Returns:
        Human readable size string

    Examples:
        >>> format_size(512)
        '512B'
        >>> format_size(3145728)
        '3MB'
    """
    if size_bytes < 0:
        return "Invalid size"

    units = ['B', 'KB', 'MB', 'GB', 'TB']
    size = int(size_bytes)
    unit_index = 0

    while size >= 1024 and unit_index < len(units) - 1:
        size //= 1024
        unit_index += 1

    return f"{size}{units[unit_index]}"


def format_duration(seconds: float) -> str:
    """Format duration in seconds to human readable format

    Examples:
        >>> format_duration(1.5)
        '1.5s'
        >>> format_duration(65)
        '1m 5s'
    """
    if seconds < 0:
        return "Invalid duration"

    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        minutes = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs}s"
    else:
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        return f"{hours}h {minutes}m"


def pluralize(count: int, singular: str, plural: str = None) -> str:
    """Pluralize a word based on count"""
    if plural is None:
        plural = singular + 's'

    word = singular if count == 1 else plural
    return f"{count} {word}"
