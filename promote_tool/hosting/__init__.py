"""Hosting platform backends"""

from .base import HostingPlatform
from .gcloud import GcloudPlatform, CommandResult

__all__ = ["HostingPlatform", "GcloudPlatform", "CommandResult"]
