# promote_tool/core/__init__.py
"""Core pipeline components of promote-tool"""

from .path_resolver import PathResolver
from .validation_engine import ValidationEngine, ValidationResult
from .artifact_resolver import ArtifactResolver
from .artifact_fetcher import ArtifactFetcher
from .manifest_engine import ManifestEngine, GeneratedManifest
from .environment_guard import EnvironmentGuard
from .retention_manager import RetentionManager

__all__ = [
    "PathResolver",
    "ValidationEngine",
    "ValidationResult",
    "ArtifactResolver",
    "ArtifactFetcher",
    "ManifestEngine",
    "GeneratedManifest",
    "EnvironmentGuard",
    "RetentionManager",
]
