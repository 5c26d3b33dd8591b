"""Rollout orchestration: prepare, deploy and dispatch phases"""

import logging
from typing import List, Optional, Sequence

from ..api.exceptions import (
    PromoteToolError,
    ConfigError,
    InvalidReleaseTagError,
    InvalidEnvironmentError,
    CredentialMissingError,
    NoServicesConfiguredError,
    SourceMissingError,
)
from ..constants import ErrorCode, MAINTENANCE_SCOPE, SERVICES_SCOPE
from ..core.artifact_fetcher import ArtifactFetcher, ProgressCallback
from ..core.artifact_resolver import ArtifactResolver
from ..core.environment_guard import EnvironmentGuard
from ..core.manifest_engine import ManifestEngine
from ..core.path_resolver import PathResolver
from ..core.retention_manager import RetentionManager
from ..core.validation_engine import ValidationEngine
from ..hosting.base import HostingPlatform
from ..models.config import DeploymentConfig
from ..models.release import ReleaseTag
from ..models.result import (
    OperationStatus,
    PhaseState,
    PhaseResult,
    PrepareResult,
    DeployResult,
    DispatchResult,
    ServiceRollout,
)
from ..repository.base import ArtifactRepository

logger = logging.getLogger(__name__)


class RolloutService:
    """Runs the three rollout phases against one configuration

    Phases run independently (usually as separate invocations), so every
    phase repeats the preflight checks and the environment guard before
    touching the filesystem or the platform. The first failure ends a
    phase; nothing already done is rolled back.
    """

    def __init__(self,
                 config: DeploymentConfig,
                 repository: ArtifactRepository,
                 platform: HostingPlatform,
                 progress_callback: Optional[ProgressCallback] = None,
                 validation_engine: Optional[ValidationEngine] = None):
        """Initialize rollout service

        Args:
            config: Deployment configuration
            repository: Artifact repository backend
            platform: Hosting platform backend
            progress_callback: Receives fetch progress after each asset
            validation_engine: Validation engine instance
        """
        self.config = config
        self.repository = repository
        self.platform = platform
        self.validation_engine = validation_engine or ValidationEngine()
        self.path_resolver = PathResolver(config.downloads_dir)
        self.manifest_engine = ManifestEngine(config)
        self.guard = EnvironmentGuard(config, platform)
        self.resolver = ArtifactResolver(config, repository)
        self.fetcher = ArtifactFetcher(repository, self.path_resolver, progress_callback)
        self.retention = RetentionManager(config, platform)

    def expand_services(self, environment: str, services: Optional[Sequence[str]]) -> List[str]:
        """Return the requested services, or every configured one in configuration order"""
        if services:
            return list(dict.fromkeys(services))

        logger.info(f"No services specified, using all services from environment: {environment}")
        expanded = self.config.get_environment(environment).service_names
        if not expanded:
            raise NoServicesConfiguredError(environment)

        logger.info(f"Found services: {' '.join(expanded)}")
        return expanded

    def _check_inputs(self, environment: str, tag: str) -> ReleaseTag:
        """Argument checks, run before any network or filesystem access"""
        if not self.validation_engine.validate_release_tag(tag).is_valid:
            raise InvalidReleaseTagError(tag)

        if not self.validation_engine.validate_environment(environment).is_valid:
            raise InvalidEnvironmentError(environment, list(self.validation_engine.valid_environments))

        if not self.config.github_token:
            raise CredentialMissingError()

        return ReleaseTag(tag)

    async def _preflight(self,
                         result: PhaseResult,
                         environment: str,
                         services: Sequence[str] = (),
                         dispatch_scopes: Sequence[str] = ()) -> None:
        """Configuration check for everything the phase will read, then the guard"""
        validation = self.validation_engine.validate_environment_config(
            self.config, environment, services, dispatch_scopes
        )
        if not validation.is_valid:
            raise ConfigError(
                f"Invalid configuration for environment {environment}:\n  "
                + "\n  ".join(validation.errors)
            )

        result.project_id = await self.guard.ensure(environment)

    @staticmethod
    def _fail(result: PhaseResult, error: PromoteToolError, **context) -> None:
        context.setdefault("environment", result.environment)
        context.setdefault("tag", result.tag)
        status = getattr(error, "status", None)
        if status is not None:
            context["status"] = status
        missing = getattr(error, "missing", None)
        if missing:
            context["missing"] = list(missing)
        logger.error(f"{result.phase} failed: {error}")
        result.fail(error.error_code or ErrorCode.VALIDATION_FAILED, str(error), **context)

    async def prepare_release(self, environment: str, tag: str,
                              services: Optional[Sequence[str]] = None) -> PrepareResult:
        """
        Fetch a release into the staging tree and switch traffic to maintenance

        Idle -> Resolving -> Fetching -> MaintenanceOn -> Done | Failed
        """
        result = PrepareResult(environment=environment, tag=tag)

        try:
            release_tag = self._check_inputs(environment, tag)
            result.services = self.expand_services(environment, services)
            await self._preflight(
                result, environment,
                services=result.services,
                dispatch_scopes=[MAINTENANCE_SCOPE]
            )

            result.state = PhaseState.RESOLVING
            asset_set = await self.resolver.resolve(release_tag, environment, result.services)

            result.state = PhaseState.FETCHING
            result.fetch = await self.fetcher.fetch(release_tag, environment, asset_set)
            if result.fetch.is_failed:
                error = result.fetch.error
                logger.error(f"{result.phase} failed: {error.message}")
                result.fail(error.code, error.message, environment=environment, tag=tag,
                            **error.context)
                return result

            result.state = PhaseState.MAINTENANCE_ON
            manifest = self.manifest_engine.write_dispatch_manifest(
                environment, MAINTENANCE_SCOPE,
                self.path_resolver.get_maintenance_dir(environment)
            )
            logger.info(f"Deploying maintenance service for environment: {environment}")
            await self.platform.deploy(manifest.path)
            result.maintenance_manifest = manifest.path

        except PromoteToolError as e:
            self._fail(result, e)
            return result

        result.succeed("Maintenance mode activated successfully")
        logger.info(result.message)
        return result

    async def deploy_services(self, environment: str, tag: str,
                              services: Optional[Sequence[str]] = None) -> DeployResult:
        """
        Deploy staged services one after another

        Idle -> PerService{Manifest -> Deploy -> Retention} -> Done | Failed
        """
        result = DeployResult(environment=environment, tag=tag)

        try:
            release_tag = self._check_inputs(environment, tag)
            targets = self.expand_services(environment, services)
            await self._preflight(result, environment, services=targets)
        except PromoteToolError as e:
            self._fail(result, e)
            return result

        result.version_id = release_tag.version_id
        result.pending_services = list(targets)

        for index, service in enumerate(targets):
            result.pending_services = targets[index + 1:]
            rollout = ServiceRollout(service=service, version_id=release_tag.version_id)
            result.rollouts.append(rollout)

            try:
                await self._deploy_service(result, rollout, environment, release_tag)
            except PromoteToolError as e:
                rollout.status = OperationStatus.FAILED
                logger.error(f"Failed to deploy {service}")
                self._fail(result, e, service=service)
                return result

        result.succeed(
            f"Deployed {len(result.rollouts)} service(s) as version {result.version_id}"
        )
        logger.info(result.message)
        return result

    async def _deploy_service(self, result: DeployResult, rollout: ServiceRollout,
                              environment: str, tag: ReleaseTag) -> None:
        service = rollout.service
        package_name = self.config.package_name(environment, service)
        source_dir = self.path_resolver.get_service_dir(
            environment, str(tag), self.config.asset_base_name(package_name, str(tag))
        )
        rollout.source_dir = source_dir

        result.state = PhaseState.MANIFEST
        if not source_dir.is_dir():
            raise SourceMissingError(service, source_dir)

        manifest = self.manifest_engine.write_service_manifest(environment, service, source_dir)
        rollout.manifest_path = manifest.path

        result.state = PhaseState.DEPLOY
        logger.info(f"Deploying {service} version {rollout.version_id} to environment: {environment}")
        await self.platform.deploy(manifest.path, version=rollout.version_id)
        rollout.status = OperationStatus.SUCCESS
        logger.info(f"Successfully deployed {service}")

        result.state = PhaseState.RETENTION
        rollout.retention = await self.retention.retire(environment, service)
        if rollout.retention.is_failed:
            result.add_warning(
                f"Version cleanup failed for {service}: {rollout.retention.message}"
            )

    async def dispatch_services(self, environment: str, tag: str) -> DispatchResult:
        """
        Restore normal routing with the full dispatch rule set

        Idle -> Manifest -> Deploy -> Done | Failed
        """
        result = DispatchResult(environment=environment, tag=tag)

        try:
            self._check_inputs(environment, tag)
            await self._preflight(result, environment, dispatch_scopes=[SERVICES_SCOPE])

            result.state = PhaseState.MANIFEST
            manifest = self.manifest_engine.write_dispatch_manifest(
                environment, SERVICES_SCOPE,
                self.path_resolver.get_release_dir(environment, tag)
            )
            result.manifest_path = manifest.path

            result.state = PhaseState.DEPLOY
            logger.info(f"Deploying dispatch rules for environment: {environment}")
            await self.platform.deploy(manifest.path)

        except PromoteToolError as e:
            self._fail(result, e)
            return result

        result.succeed("Dispatch rules deployed successfully")
        logger.info(result.message)
        return result
