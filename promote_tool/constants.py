"""Global constants for promote-tool"""

import re

APP_NAME = "promote-tool"
LOG_FORMAT = "%(message)s"

# Release tags: v<major>.<minor>.<patch>-build.<n>
RELEASE_TAG_PATTERN = re.compile(
    r"^v(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)-build\.(?P<build>\d+)$"
)
RELEASE_TAG_EXAMPLE = "vx.x.x-build.x"

# Environments
VALID_ENVIRONMENTS = ("stage", "prod")
PROJECT_ENVIRONMENTS = ("dev", "stage", "prod")
MAINTENANCE_SCOPE = "maintenance"
SERVICES_SCOPE = "services"

# Configuration
DEFAULT_CONFIG_FILE = "deployment.yaml"
DEFAULT_DOWNLOADS_DIR = "downloads"
DEFAULT_KEEP_VERSIONS = 10
DEFAULT_GITHUB_API = "https://api.github.com"
ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
ENV_LOG_LEVEL = "PROMOTE_TOOL_LOG_LEVEL"

# Staging tree layout
TEMP_DIR_NAME = ".temp"
ARCHIVES_DIR_NAME = "archives"
MAINTENANCE_DIR_NAME = "maintenance"
ARCHIVE_SUFFIX = ".zip"
APP_MANIFEST_FILE = "app.yaml"
DISPATCH_MANIFEST_FILE = "dispatch.yaml"

# Network timeouts (seconds)
METADATA_CONNECT_TIMEOUT = 10
METADATA_TOTAL_TIMEOUT = 30
DOWNLOAD_CONNECT_TIMEOUT = 10
DOWNLOAD_TOTAL_TIMEOUT = 300
DEFAULT_CHUNK_SIZE = 1024 * 1024  # 1MB

# Platform command timeouts (seconds)
PLATFORM_QUERY_TIMEOUT = 60
PLATFORM_DEPLOY_TIMEOUT = 1800
PLATFORM_DELETE_TIMEOUT = 600
GCLOUD_BINARY = "gcloud"


# Error codes
class ErrorCode:
    CONFIG_FORMAT_ERROR = "PT001"
    PROJECT_NOT_CONFIGURED = "PT002"
    MANIFEST_MISSING = "PT003"
    VALIDATION_FAILED = "PT004"
    INVALID_RELEASE_TAG = "PT005"
    INVALID_ENVIRONMENT = "PT006"
    MISSING_ASSETS = "PT007"
    NO_SERVICES_CONFIGURED = "PT008"
    SERVICE_NAME_MISMATCH = "PT009"
    RUNTIME_UNSPECIFIED = "PT010"
    CREDENTIAL_MISSING = "PT011"
    RELEASE_NOT_FOUND = "PT012"
    TRANSIENT_FETCH = "PT013"
    INTEGRITY_FAILED = "PT014"
    PLATFORM_FAILED = "PT015"
    PLATFORM_QUERY_FAILED = "PT016"
    PROJECT_MISMATCH = "PT017"
    PLATFORM_NOT_ENABLED = "PT018"
    INSUFFICIENT_PERMISSIONS = "PT019"
    SOURCE_MISSING = "PT020"
    RETENTION_FAILED = "PT021"


# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_ARROW = "→"
