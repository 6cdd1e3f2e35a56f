# history_heatmap/utils - config and logging helpers

from .config_manager import Config, ConfigError
from .logger_utils import Log

__all__ = ["Config", "ConfigError", "Log"]
