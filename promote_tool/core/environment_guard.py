"""Environment/project identity check"""

import logging

from ..api.exceptions import (
    ProjectNotConfiguredError,
    ProjectMismatchError,
    ProjectInaccessibleError,
    PlatformNotEnabledError,
    InsufficientPermissionsError,
)
from ..hosting.base import HostingPlatform
from ..models.config import DeploymentConfig

logger = logging.getLogger(__name__)


class EnvironmentGuard:
    """Blocks any mutating operation unless the active project is the configured one

    The guard never switches projects; a mismatch always fails.
    """

    def __init__(self, config: DeploymentConfig, platform: HostingPlatform):
        self.config = config
        self.platform = platform

    async def ensure(self, environment: str) -> str:
        """
        Verify the active platform project for an environment

        Args:
            environment: Environment name

        Returns:
            The verified project id

        Raises:
            ProjectNotConfiguredError: No project mapped to the environment
            PlatformQueryFailedError: Active project cannot be read
            ProjectInaccessibleError: Mismatch and the configured project is unreachable
            ProjectMismatchError: Mismatch
            PlatformNotEnabledError: App Engine not enabled
            InsufficientPermissionsError: Versions cannot be listed
        """
        project_id = self.config.get_project(environment)
        if not project_id:
            raise ProjectNotConfiguredError(environment)

        active = await self.platform.get_active_project()

        if active != project_id:
            logger.info(f"Current project: {active}")
            logger.info(f"Input to project: {project_id}")

            if not await self.platform.describe_project(project_id):
                raise ProjectInaccessibleError(environment, project_id, active)
            raise ProjectMismatchError(environment, project_id, active)

        logger.info(f"Already using correct project: {project_id}")

        if not await self.platform.is_app_enabled():
            raise PlatformNotEnabledError(project_id)

        if not await self.platform.can_list_versions():
            raise InsufficientPermissionsError(project_id)

        logger.info(f"Successfully verified GCP project: {project_id}")
        return project_id
