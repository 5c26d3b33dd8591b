# promote_tool/api/__init__.py
"""API layer for promote-tool"""

from .promoter import Promoter, prepare_release, deploy_services, dispatch_services
from .exceptions import (
    PromoteToolError,
    ConfigError,
    ProjectNotConfiguredError,
    ManifestMissingError,
    ValidationError,
    InvalidReleaseTagError,
    InvalidEnvironmentError,
    CredentialMissingError,
    NoServicesConfiguredError,
    MissingAssetsError,
    ServiceNameMismatchError,
    RuntimeUnspecifiedError,
    TransientFetchError,
    ReleaseNotFoundError,
    IntegrityError,
    PlatformError,
    PlatformQueryFailedError,
    ProjectMismatchError,
    ProjectInaccessibleError,
    PlatformNotEnabledError,
    InsufficientPermissionsError,
    SourceMissingError,
)

__all__ = [
    # Main class
    "Promoter",

    # Convenience functions
    "prepare_release",
    "deploy_services",
    "dispatch_services",

    # Exceptions
    "PromoteToolError",
    "ConfigError",
    "ProjectNotConfiguredError",
    "ManifestMissingError",
    "ValidationError",
    "InvalidReleaseTagError",
    "InvalidEnvironmentError",
    "CredentialMissingError",
    "NoServicesConfiguredError",
    "MissingAssetsError",
    "ServiceNameMismatchError",
    "RuntimeUnspecifiedError",
    "TransientFetchError",
    "ReleaseNotFoundError",
    "IntegrityError",
    "PlatformError",
    "PlatformQueryFailedError",
    "ProjectMismatchError",
    "ProjectInaccessibleError",
    "PlatformNotEnabledError",
    "InsufficientPermissionsError",
    "SourceMissingError",
]
