"""
Shared utilities.
"""

from .config_manager import ConfigManager, DEFAULT_CONFIG_PATH

__all__ = [
    'ConfigManager',
    'DEFAULT_CONFIG_PATH',
]
