"""Validation engine for tags, environments and configuration"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any, Iterable

import jsonschema

from ..constants import (
    RELEASE_TAG_PATTERN,
    RELEASE_TAG_EXAMPLE,
    VALID_ENVIRONMENTS,
)
from ..models.config import DeploymentConfig


@dataclass
class ValidationResult:
    """Validation result container"""
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    info: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add error message"""
        self.errors.append(message)
        self.is_valid = False

    def add_info(self, message: str) -> None:
        """Add info message"""
        self.info.append(message)


class ValidationEngine:
    """Execute validation operations that precede any side effect"""

    def __init__(self, valid_environments: Iterable[str] = VALID_ENVIRONMENTS):
        self.valid_environments = tuple(valid_environments)

    def validate_release_tag(self, tag: Optional[str]) -> ValidationResult:
        """
        Validate release tag format

        Args:
            tag: Tag to validate

        Returns:
            ValidationResult
        """
        result = ValidationResult()

        if not tag:
            result.add_error("Release tag cannot be empty")
            return result

        match = RELEASE_TAG_PATTERN.fullmatch(tag)
        if not match:
            result.add_error(
                f"Invalid release tag format: '{tag}'. Expected: {RELEASE_TAG_EXAMPLE}"
            )
            return result

        result.add_info(
            f"Version: {match.group('major')}.{match.group('minor')}.{match.group('patch')}, "
            f"build {match.group('build')}"
        )
        return result

    def validate_environment(self, environment: Optional[str]) -> ValidationResult:
        """Validate that an environment is in the supported set"""
        result = ValidationResult()

        if environment not in self.valid_environments:
            result.add_error(
                f"Invalid environment: {environment}. "
                f"Valid environments are: {', '.join(self.valid_environments)}"
            )
        return result

    def validate_config(self, data: Any, schema: Dict[str, Any]) -> ValidationResult:
        """
        Validate a configuration document against a JSON schema

        Every violation is reported, not only the first.
        """
        result = ValidationResult()

        if not data:
            result.add_error("Configuration is empty")
            return result

        validator = jsonschema.Draft7Validator(schema)
        for error in sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path)):
            location = ".".join(str(p) for p in error.absolute_path) or "<root>"
            result.add_error(f"{location}: {error.message}")

        return result

    def validate_environment_config(self,
                                    config: DeploymentConfig,
                                    environment: str,
                                    services: Iterable[str] = (),
                                    dispatch_scopes: Iterable[str] = ()) -> ValidationResult:
        """
        Check that everything a phase will read from configuration exists

        Args:
            config: Deployment configuration
            environment: Environment name
            services: Services whose app.yaml fragments will be generated
            dispatch_scopes: Dispatch scopes that will be generated

        Returns:
            ValidationResult listing every offending key
        """
        result = ValidationResult()
        env_config = config.get_environment(environment)
        prefix = f"environments.{environment}"

        if environment not in config.environments:
            result.add_error(f"{prefix}: environment not configured")
            return result

        for service in services:
            service_config = env_config.get_service(service)
            if service_config is None:
                result.add_error(f"{prefix}.services.{service}: service not configured")
                continue

            app_yaml = service_config.app_yaml
            key = f"{prefix}.services.{service}.app_yaml"
            if not app_yaml:
                result.add_error(f"{key}: app.yaml configuration not defined")
                continue

            declared = app_yaml.get("service")
            if declared != service:
                result.add_error(f"{key}.service: expected '{service}', found '{declared}'")

            if not app_yaml.get("runtime"):
                result.add_error(f"{key}.runtime: runtime not specified")

        for scope in dispatch_scopes:
            if not env_config.dispatch.get(scope):
                result.add_error(
                    f"{prefix}.dispatch.{scope}: dispatch.yaml configuration not defined"
                )

        return result
