"""Exception definitions for promote-tool API"""

from typing import List, Optional

from ..constants import ErrorCode


class PromoteToolError(Exception):
    """Base exception for promote-tool"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


# Configuration errors

class ConfigError(PromoteToolError):
    """Configuration error"""

    def __init__(self, message: str, error_code: str = ErrorCode.CONFIG_FORMAT_ERROR):
        super().__init__(message, error_code)


class ProjectNotConfiguredError(ConfigError):
    """No GCP project configured for an environment"""

    def __init__(self, environment: str):
        super().__init__(
            f"GCP project ID not configured for environment: {environment} "
            f"(key: gcp_projects.{environment})",
            ErrorCode.PROJECT_NOT_CONFIGURED
        )
        self.environment = environment


class ManifestMissingError(ConfigError):
    """Manifest fragment absent or empty in configuration"""

    def __init__(self, key: str, environment: str):
        super().__init__(
            f"Manifest configuration not defined: {key} (environment: {environment})",
            ErrorCode.MANIFEST_MISSING
        )
        self.key = key
        self.environment = environment


# Validation errors

class ValidationError(PromoteToolError):
    """Validation error"""

    def __init__(self, message: str, error_code: str = ErrorCode.VALIDATION_FAILED):
        super().__init__(message, error_code)


class InvalidReleaseTagError(ValidationError):
    """Release tag does not match v<major>.<minor>.<patch>-build.<n>"""

    def __init__(self, tag: str):
        super().__init__(
            f"Invalid release tag format: '{tag}'. Expected: vx.x.x-build.x",
            ErrorCode.INVALID_RELEASE_TAG
        )
        self.tag = tag


class InvalidEnvironmentError(ValidationError):
    """Environment outside the supported set"""

    def __init__(self, environment: str, valid: List[str]):
        super().__init__(
            f"Invalid environment: {environment}. "
            f"Valid environments are: {', '.join(valid)}",
            ErrorCode.INVALID_ENVIRONMENT
        )
        self.environment = environment


class CredentialMissingError(ValidationError):
    """Repository token is not set"""

    def __init__(self):
        super().__init__(
            "GitHub token is not set. Set 'github_token' in the configuration "
            "or the GITHUB_TOKEN environment variable.",
            ErrorCode.CREDENTIAL_MISSING
        )


class NoServicesConfiguredError(ValidationError):
    """No services to operate on"""

    def __init__(self, environment: str):
        super().__init__(
            f"No services found in environment: {environment}",
            ErrorCode.NO_SERVICES_CONFIGURED
        )
        self.environment = environment


class MissingAssetsError(ValidationError):
    """One or more services have no matching release asset"""

    def __init__(self, tag: str, missing: List[str]):
        super().__init__(
            f"Missing assets for services: {' '.join(missing)} in release {tag}",
            ErrorCode.MISSING_ASSETS
        )
        self.tag = tag
        self.missing = list(missing)


class ServiceNameMismatchError(ValidationError):
    """Declared service name in app.yaml differs from the service key"""

    def __init__(self, expected: str, found: Optional[str]):
        super().__init__(
            f"Service name mismatch in app.yaml for {expected} (found: {found})",
            ErrorCode.SERVICE_NAME_MISMATCH
        )
        self.expected = expected
        self.found = found


class RuntimeUnspecifiedError(ValidationError):
    """app.yaml has no runtime"""

    def __init__(self, service: str):
        super().__init__(
            f"Runtime not specified in app.yaml for service {service}",
            ErrorCode.RUNTIME_UNSPECIFIED
        )
        self.service = service


# Fetch errors

class TransientFetchError(PromoteToolError):
    """Network or HTTP failure while talking to the artifact repository"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message, ErrorCode.TRANSIENT_FETCH)
        self.status = status


class ReleaseNotFoundError(PromoteToolError):
    """Release tag not found in the repository"""

    def __init__(self, tag: str):
        super().__init__(f"Release not found: {tag} (HTTP 404)", ErrorCode.RELEASE_NOT_FOUND)
        self.tag = tag
        self.status = 404


class IntegrityError(PromoteToolError):
    """Corrupt archive or failed extraction"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.INTEGRITY_FAILED)


# Platform errors

class PlatformError(PromoteToolError):
    """Hosting platform command failure"""

    def __init__(self, message: str, error_code: str = ErrorCode.PLATFORM_FAILED,
                 returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message, error_code)
        self.returncode = returncode
        self.stderr = stderr


class PlatformQueryFailedError(PlatformError):
    """Could not read the active platform project"""

    def __init__(self, message: str = "Failed to get current GCP project", stderr: str = ""):
        super().__init__(message, ErrorCode.PLATFORM_QUERY_FAILED, stderr=stderr)


class ProjectMismatchError(PlatformError):
    """Active project differs from the configured one"""

    def __init__(self, environment: str, expected: str, active: Optional[str],
                 message: Optional[str] = None):
        super().__init__(
            message or (
                f"Google project id not match for environment {environment}: "
                f"active '{active}', configured '{expected}'"
            ),
            ErrorCode.PROJECT_MISMATCH
        )
        self.environment = environment
        self.expected = expected
        self.active = active


class ProjectInaccessibleError(ProjectMismatchError):
    """Active project differs and the configured one cannot be reached"""

    def __init__(self, environment: str, expected: str, active: Optional[str]):
        super().__init__(
            environment, expected, active,
            f"Project {expected} does not exist or you don't have access to it "
            f"(active project: '{active}')"
        )


class PlatformNotEnabledError(PlatformError):
    """App Engine not enabled in the project"""

    def __init__(self, project_id: str):
        super().__init__(
            f"App Engine is not enabled in project: {project_id}",
            ErrorCode.PLATFORM_NOT_ENABLED
        )
        self.project_id = project_id


class InsufficientPermissionsError(PlatformError):
    """Account cannot enumerate deployed versions"""

    def __init__(self, project_id: str):
        super().__init__(
            f"Insufficient permissions in project: {project_id}. "
            "Required permissions: appengine.applications.get, appengine.versions.list",
            ErrorCode.INSUFFICIENT_PERMISSIONS
        )
        self.project_id = project_id


class SourceMissingError(PromoteToolError):
    """Staged artifact directory for a service is absent"""

    def __init__(self, service: str, source_dir):
        super().__init__(
            f"Source directory not found for {service}: {source_dir}",
            ErrorCode.SOURCE_MISSING
        )
        self.service = service
        self.source_dir = source_dir
