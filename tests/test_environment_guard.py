"""Tests for the environment/project identity check"""

import pytest

from promote_tool.api.exceptions import (
    ProjectNotConfiguredError,
    ProjectMismatchError,
    ProjectInaccessibleError,
    PlatformQueryFailedError,
    PlatformNotEnabledError,
    InsufficientPermissionsError,
)
from promote_tool.core.environment_guard import EnvironmentGuard
from promote_tool.models.config import DeploymentConfig


@pytest.mark.asyncio
async def test_matching_project(config, platform):
    guard = EnvironmentGuard(config, platform)

    assert await guard.ensure("stage") == "acme-stage"
    platform.is_app_enabled.assert_awaited_once()
    platform.can_list_versions.assert_awaited_once()
    platform.describe_project.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize("accessible", [True, False])
async def test_mismatch_always_fails(config, platform, accessible):
    platform.describe_project.return_value = accessible
    guard = EnvironmentGuard(config, platform)

    with pytest.raises(ProjectMismatchError) as exc_info:
        await guard.ensure("prod")

    assert exc_info.value.expected == "acme-prod"
    assert exc_info.value.active == "acme-stage"
    assert isinstance(exc_info.value, ProjectInaccessibleError) is not accessible
    platform.describe_project.assert_awaited_once_with("acme-prod")
    platform.is_app_enabled.assert_not_awaited()


@pytest.mark.asyncio
async def test_unset_active_project_is_a_mismatch(config, platform):
    platform.get_active_project.return_value = ""

    with pytest.raises(ProjectMismatchError):
        await EnvironmentGuard(config, platform).ensure("stage")


@pytest.mark.asyncio
async def test_project_not_configured(config_data, tmp_path, platform):
    del config_data["gcp_projects"]["prod"]
    config = DeploymentConfig.from_dict(config_data, base_dir=tmp_path)

    with pytest.raises(ProjectNotConfiguredError):
        await EnvironmentGuard(config, platform).ensure("prod")

    platform.get_active_project.assert_not_awaited()


@pytest.mark.asyncio
async def test_active_project_query_fails(config, platform):
    platform.get_active_project.side_effect = PlatformQueryFailedError()

    with pytest.raises(PlatformQueryFailedError):
        await EnvironmentGuard(config, platform).ensure("stage")


@pytest.mark.asyncio
async def test_app_engine_not_enabled(config, platform):
    platform.is_app_enabled.return_value = False

    with pytest.raises(PlatformNotEnabledError):
        await EnvironmentGuard(config, platform).ensure("stage")

    platform.can_list_versions.assert_not_awaited()


@pytest.mark.asyncio
async def test_insufficient_permissions(config, platform):
    platform.can_list_versions.return_value = False

    with pytest.raises(InsufficientPermissionsError):
        await EnvironmentGuard(config, platform).ensure("stage")
