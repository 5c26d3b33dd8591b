"""Promoter API for release promotion phases"""

from pathlib import Path
from typing import Optional, Sequence, Union

from ..constants import DEFAULT_CONFIG_FILE
from ..core.artifact_fetcher import ProgressCallback
from ..hosting.base import HostingPlatform
from ..hosting.gcloud import GcloudPlatform
from ..models.config import DeploymentConfig
from ..models.result import PrepareResult, DeployResult, DispatchResult
from ..repository.base import ArtifactRepository
from ..repository.github import GitHubRepository
from ..services.config_service import load_config
from ..services.rollout_service import RolloutService
from ..utils.async_utils import run_async


class Promoter:
    """Promoter class for the prepare / deploy / dispatch phases"""

    def __init__(self,
                 config: DeploymentConfig,
                 repository: Optional[ArtifactRepository] = None,
                 platform: Optional[HostingPlatform] = None,
                 progress_callback: Optional[ProgressCallback] = None):
        """
        Initialize promoter

        Args:
            config: Deployment configuration
            repository: Artifact repository (GitHub releases by default)
            platform: Hosting platform (gcloud by default)
            progress_callback: Receives fetch progress after each asset
        """
        self.config = config
        self.repository = repository or GitHubRepository(
            owner=config.repo_owner,
            repo=config.repo_name,
            token=config.github_token,
            api_url=config.github_api
        )
        self.platform = platform or GcloudPlatform()
        self.progress_callback = progress_callback

    @classmethod
    def from_config_file(cls, config_path: Union[str, Path] = DEFAULT_CONFIG_FILE,
                         **kwargs) -> 'Promoter':
        """Create a promoter from a configuration file"""
        return cls(load_config(config_path), **kwargs)

    def _service(self) -> RolloutService:
        return RolloutService(
            self.config,
            self.repository,
            self.platform,
            progress_callback=self.progress_callback
        )

    async def _run(self, coro):
        try:
            return await coro
        finally:
            await self.repository.close()

    def prepare_release(self, environment: str, tag: str,
                        services: Optional[Sequence[str]] = None) -> PrepareResult:
        """
        Fetch release artifacts and activate maintenance mode

        Args:
            environment: Target environment
            tag: Release tag
            services: Services to fetch (all configured when empty)

        Returns:
            PrepareResult
        """
        return run_async(self._run(
            self._service().prepare_release(environment, tag, services)
        ))

    def deploy_services(self, environment: str, tag: str,
                        services: Optional[Sequence[str]] = None) -> DeployResult:
        """
        Deploy staged services and retire old versions

        Args:
            environment: Target environment
            tag: Release tag
            services: Services to deploy, in order (all configured when empty)

        Returns:
            DeployResult
        """
        return run_async(self._run(
            self._service().deploy_services(environment, tag, services)
        ))

    def dispatch_services(self, environment: str, tag: str) -> DispatchResult:
        """
        Deploy the normal dispatch rules, ending maintenance mode

        Args:
            environment: Target environment
            tag: Release tag

        Returns:
            DispatchResult
        """
        return run_async(self._run(
            self._service().dispatch_services(environment, tag)
        ))


def prepare_release(environment: str, tag: str,
                    services: Optional[Sequence[str]] = None,
                    config_path: Union[str, Path] = DEFAULT_CONFIG_FILE) -> PrepareResult:
    """Convenience function for the prepare-release phase"""
    return Promoter.from_config_file(config_path).prepare_release(environment, tag, services)


def deploy_services(environment: str, tag: str,
                    services: Optional[Sequence[str]] = None,
                    config_path: Union[str, Path] = DEFAULT_CONFIG_FILE) -> DeployResult:
    """Convenience function for the deploy-service phase"""
    return Promoter.from_config_file(config_path).deploy_services(environment, tag, services)


def dispatch_services(environment: str, tag: str,
                      config_path: Union[str, Path] = DEFAULT_CONFIG_FILE) -> DispatchResult:
    """Convenience function for the dispatch-service phase"""
    return Promoter.from_config_file(config_path).dispatch_services(environment, tag)
