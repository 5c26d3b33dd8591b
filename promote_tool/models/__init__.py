# promote_tool/models/__init__.py
"""Data models for promote-tool"""

from .release import ReleaseTag, Asset, Release, AssetSet, StagingTree
from .config import DeploymentConfig, EnvironmentConfig, ServiceConfig
from .result import (
    OperationStatus,
    PhaseState,
    ErrorDetail,
    Result,
    FetchProgress,
    FetchResult,
    RetentionResult,
    ServiceRollout,
    PhaseResult,
    PrepareResult,
    DeployResult,
    DispatchResult,
)

__all__ = [
    # Release models
    "ReleaseTag",
    "Asset",
    "Release",
    "AssetSet",
    "StagingTree",

    # Config models
    "DeploymentConfig",
    "EnvironmentConfig",
    "ServiceConfig",

    # Result models
    "OperationStatus",
    "PhaseState",
    "ErrorDetail",
    "Result",
    "FetchProgress",
    "FetchResult",
    "RetentionResult",
    "ServiceRollout",
    "PhaseResult",
    "PrepareResult",
    "DeployResult",
    "DispatchResult",
]
