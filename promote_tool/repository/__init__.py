"""Artifact repository backends"""

from .base import ArtifactRepository
from .github import GitHubRepository

__all__ = ["ArtifactRepository", "GitHubRepository"]
