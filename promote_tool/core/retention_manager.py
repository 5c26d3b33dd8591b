"""Old version cleanup"""

import logging

from ..api.exceptions import PlatformError
from ..constants import ErrorCode
from ..hosting.base import HostingPlatform
from ..models.config import DeploymentConfig
from ..models.result import RetentionResult, OperationStatus

logger = logging.getLogger(__name__)


class RetentionManager:
    """Keeps the newest ``keep_versions`` versions of a service"""

    def __init__(self, config: DeploymentConfig, platform: HostingPlatform):
        self.config = config
        self.platform = platform

    @property
    def keep_versions(self) -> int:
        return self.config.keep_versions

    async def retire(self, environment: str, service: str) -> RetentionResult:
        """
        Delete all but the newest versions of a service

        Cleanup is best-effort: platform failures are recorded on the
        result, never raised.

        Args:
            environment: Environment name
            service: Service name

        Returns:
            RetentionResult
        """
        result = RetentionResult(service=service)
        logger.info(f"Cleaning up old versions for {service} in environment: {environment}")

        try:
            versions = await self.platform.list_versions(service)
        except PlatformError as e:
            return self._failed(result, str(e))

        result.kept = versions[:self.keep_versions]
        stale = versions[self.keep_versions:]

        if not stale:
            result.message = f"No old versions to cleanup for {service}"
            logger.info(result.message)
            result.complete(OperationStatus.SUCCESS)
            return result

        logger.info(f"Deleting old versions: {' '.join(stale)}")
        try:
            await self.platform.delete_versions(service, stale)
        except PlatformError as e:
            return self._failed(result, str(e))

        result.deleted = stale
        result.message = f"Deleted {len(stale)} old version(s) of {service}"
        logger.info(result.message)
        result.complete(OperationStatus.SUCCESS)
        return result

    @staticmethod
    def _failed(result: RetentionResult, message: str) -> RetentionResult:
        logger.warning(f"Version cleanup failed for {result.service}: {message}")
        result.add_error(ErrorCode.RETENTION_FAILED, message, service=result.service)
        result.message = message
        result.complete(OperationStatus.FAILED)
        return result
