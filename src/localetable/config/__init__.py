"""
Configuration module for localetable.

Exports the main components for convenient imports.
"""

from .loader import load_config
from .schema import AppConfig, LoaderConfig, LoggingConfig

__all__ = [
    "load_config",
    "AppConfig",
    "LoaderConfig",
    "LoggingConfig",
]
