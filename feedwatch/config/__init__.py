"""Configuration management for feedwatch."""

from .loader import Config, load_config, save_config
from .models import ConfigModel, FetchConfig, LoggingConfig, PostgresConfig, SchedulerConfig

__all__ = [
    "Config",
    "ConfigModel",
    "FetchConfig",
    "LoggingConfig",
    "PostgresConfig",
    "SchedulerConfig",
    "load_config",
    "save_config",
]
