"""Promote Tool - Promote GitHub release artifacts to App Engine.

This tool fetches release archives from GitHub, switches an environment
into maintenance mode, deploys each service as a tagged version and
restores normal routing once the rollout is done.
"""

from .__version__ import __version__, __version_info__, __license__

# Core API
from .api.promoter import Promoter, prepare_release, deploy_services, dispatch_services

# Data models
from .models.config import DeploymentConfig, EnvironmentConfig, ServiceConfig
from .models.release import ReleaseTag, Asset, Release, AssetSet
from .models.result import (
    PrepareResult,
    DeployResult,
    DispatchResult,
    FetchResult,
    RetentionResult,
)

# Exceptions
from .api.exceptions import (
    PromoteToolError,
    ConfigError,
    ValidationError,
    InvalidReleaseTagError,
    InvalidEnvironmentError,
    MissingAssetsError,
    TransientFetchError,
    ReleaseNotFoundError,
    IntegrityError,
    PlatformError,
    ProjectMismatchError,
    SourceMissingError,
)

# Utility functions
from .services.config_service import load_config
from .utils import format_size

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__license__",

    # Main class
    "Promoter",

    # Core API functions
    "prepare_release",
    "deploy_services",
    "dispatch_services",

    # Data models
    "DeploymentConfig",
    "EnvironmentConfig",
    "ServiceConfig",
    "ReleaseTag",
    "Asset",
    "Release",
    "AssetSet",
    "PrepareResult",
    "DeployResult",
    "DispatchResult",
    "FetchResult",
    "RetentionResult",

    # Exceptions
    "PromoteToolError",
    "ConfigError",
    "ValidationError",
    "InvalidReleaseTagError",
    "InvalidEnvironmentError",
    "MissingAssetsError",
    "TransientFetchError",
    "ReleaseNotFoundError",
    "IntegrityError",
    "PlatformError",
    "ProjectMismatchError",
    "SourceMissingError",

    # Utility functions
    "load_config",
    "format_size",
]
