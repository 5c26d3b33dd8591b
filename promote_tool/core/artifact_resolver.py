"""Release asset resolution"""

import logging
from typing import List, Sequence

from ..api.exceptions import MissingAssetsError, NoServicesConfiguredError
from ..models.config import DeploymentConfig
from ..models.release import ReleaseTag, AssetSet, Asset, Release
from ..repository.base import ArtifactRepository

logger = logging.getLogger(__name__)


class ArtifactResolver:
    """Maps requested services onto the assets of a release"""

    def __init__(self, config: DeploymentConfig, repository: ArtifactRepository):
        self.config = config
        self.repository = repository

    async def resolve(self, tag: ReleaseTag, environment: str,
                      services: Sequence[str]) -> AssetSet:
        """
        Resolve the assets of a release for a set of services

        Args:
            tag: Release tag
            environment: Environment (for package name lookup)
            services: Services, already expanded by the caller

        Returns:
            AssetSet whose assets keep the repository listing order

        Raises:
            NoServicesConfiguredError: If services is empty
            ReleaseNotFoundError: If the release does not exist
            TransientFetchError: On any other repository failure
            MissingAssetsError: Listing every service without an asset
        """
        services = list(services)
        if not services:
            raise NoServicesConfiguredError(environment)

        logger.info(f"Fetching release information for {tag}...")
        release = await self.repository.get_release(str(tag))
        logger.info(f"Validating services: {' '.join(services)}")

        return self.select_assets(tag, environment, services, release)

    def select_assets(self, tag: ReleaseTag, environment: str,
                      services: List[str], release: Release) -> AssetSet:
        """Pick the assets of each service, failing on all unmet services at once"""
        missing = []
        service_assets = {}

        for service in services:
            package_name = self.config.package_name(environment, service)
            prefix = self.config.asset_prefix(package_name)
            candidates = [a for a in release.assets if a.name.startswith(prefix)]

            if not candidates:
                missing.append(service)
                continue

            base_name = self.config.asset_base_name(package_name, str(tag))
            exact = [a for a in candidates if a.directory_name == base_name]
            if not exact:
                logger.warning(
                    f"No asset named {base_name} for {service}, "
                    f"using every asset starting with {prefix}: "
                    f"{', '.join(a.name for a in candidates)}"
                )
            service_assets[service] = exact or candidates

        if missing:
            raise MissingAssetsError(str(tag), missing)

        logger.info("All specified services found in release")

        selected = {a.name for assets in service_assets.values() for a in assets}
        ordered: List[Asset] = []
        for asset in release.assets:
            if asset.name in selected and asset not in ordered:
                ordered.append(asset)

        return AssetSet(
            tag=tag,
            services=services,
            assets=ordered,
            service_assets=service_assets
        )
