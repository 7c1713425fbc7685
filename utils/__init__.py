"""
Utilities Package
Network configuration shared by the deployment toolkit
"""

from .config import NetworkConfig, ConfigError, load_network_config

__all__ = [
    'NetworkConfig',
    'ConfigError',
    'load_network_config'
]
