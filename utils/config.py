"""
Network Configuration
Resolves which chain to deploy to from config/networks.json and .env
"""

import os
import json
from dataclasses import dataclass
from urllib.parse import urlparse
from typing import Optional
from loguru import logger
from dotenv import load_dotenv

load_dotenv()

DEFAULT_CONFIG_PATH = "config/networks.json"


class ConfigError(ValueError):
    """Raised for unknown networks or malformed settings"""


@dataclass
class NetworkConfig:
    """Resolved settings for a single network"""

    name: str
    rpc_url: str
    chain_id: Optional[int] = None
    confirmation_timeout: float = 120
    default_gas_limit: int = 3000000
    artifacts_dir: str = "artifacts"
    deployer_private_key: Optional[str] = None

    @property
    def rpc_host(self) -> str:
        """Host (and port) of the RPC endpoint; hosted URLs carry API keys in the path"""
        parsed = urlparse(self.rpc_url)

        if not parsed.hostname:
            return "<invalid url>"
        if parsed.port:
            return f"{parsed.hostname}:{parsed.port}"
        return parsed.hostname


def _number(setting: str, value, cast):
    if value is None:
        return None

    if isinstance(value, bool):
        raise ConfigError(f"{setting} must be a number, got {value!r}")

    try:
        return cast(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{setting} must be a number, got {value!r}") from e


def _env_number(var: str, default, cast):
    value = os.getenv(var)

    if value is None or value == '':
        return default

    return _number(var, value, cast)


def load_network_config(
    network_name: Optional[str] = None,
    config_path: str = DEFAULT_CONFIG_PATH
) -> NetworkConfig:
    """
    Load the configuration for a network

    Args:
        network_name: Entry in networks.json (defaults to $NETWORK, then
            the file's default_network)
        config_path: Path to networks.json

    Returns:
        NetworkConfig with environment overrides applied
    """
    try:
        with open(config_path, 'r') as f:
            config = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Cannot read network config {config_path}: {e}") from e

    network_name = (
        network_name
        or os.getenv('NETWORK')
        or config.get('default_network', 'localhost')
    )

    networks = config.get('networks', {})
    if network_name not in networks:
        raise ConfigError(
            f"Unknown network '{network_name}' "
            f"(available: {', '.join(sorted(networks))})"
        )

    network = networks[network_name]

    rpc_url = (
        os.getenv('RPC_URL')
        or os.getenv(network.get('rpc_url_env', ''))
        or network.get('default_rpc_url')
    )
    if not rpc_url:
        raise ConfigError(
            f"No RPC URL for network '{network_name}': "
            f"set RPC_URL or {network.get('rpc_url_env', 'RPC_URL')}"
        )

    network_config = NetworkConfig(
        name=network_name,
        rpc_url=rpc_url,
        chain_id=_env_number(
            'CHAIN_ID',
            _number(f"{network_name}.chain_id", network.get('chain_id'), int),
            int
        ),
        confirmation_timeout=_env_number(
            'CONFIRMATION_TIMEOUT',
            _number(
                f"{network_name}.confirmation_timeout",
                network.get('confirmation_timeout', 120),
                float
            ),
            float
        ),
        default_gas_limit=_number(
            f"{network_name}.default_gas_limit",
            network.get('default_gas_limit', 3000000),
            int
        ),
        artifacts_dir=os.getenv('ARTIFACTS_DIR') or 'artifacts',
        deployer_private_key=os.getenv('DEPLOYER_PRIVATE_KEY') or None
    )

    logger.debug(f"Using network {network_name} ({network.get('name', network_name)})")
    return network_config
