"""Service layer for promote-tool"""

from .config_service import ConfigService, load_config, CONFIG_SCHEMA
from .rollout_service import RolloutService

__all__ = [
    "ConfigService",
    "load_config",
    "CONFIG_SCHEMA",
    "RolloutService",
]
