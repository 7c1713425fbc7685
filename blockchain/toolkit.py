"""
Deployment Toolkit
Network connection, signer and artifact lookup behind the deploy script
"""

from typing import Optional
from web3 import AsyncWeb3, AsyncHTTPProvider
from eth_account import Account
from loguru import logger

from utils.config import NetworkConfig, load_network_config
from .artifacts import ArtifactStore
from .contract_factory import ContractFactory
from .exceptions import DeploymentSubmissionError, TemplateNotFoundError


class DeploymentToolkit:
    """
    Entry point for deploying compiled contracts to one network

    Signs locally when a private key is configured, otherwise relies on the
    node's first unlocked account (as a local Hardhat node provides).
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        network: NetworkConfig,
        artifacts: ArtifactStore,
        account=None
    ):
        self.w3 = w3
        self.network = network
        self.artifacts = artifacts
        self.account = account
        self._closed = False

    @classmethod
    def from_env(cls, network_name: Optional[str] = None) -> 'DeploymentToolkit':
        """Build a toolkit from config/networks.json and the environment"""
        network = load_network_config(network_name)

        w3 = AsyncWeb3(AsyncHTTPProvider(network.rpc_url))

        account = None
        if network.deployer_private_key:
            account = Account.from_key(network.deployer_private_key)

        logger.info(f"Network: {network.name} ({network.rpc_host})")
        return cls(w3, network, ArtifactStore(network.artifacts_dir), account)

    async def get_contract_factory(self, name: str) -> ContractFactory:
        """
        Get a factory for a compiled contract

        Args:
            name: Contract name or fully qualified name (path/File.sol:Name)

        Raises:
            TemplateNotFoundError: unknown or non-deployable contract
        """
        artifact = self.artifacts.read(name)

        if not artifact.is_deployable:
            raise TemplateNotFoundError(
                f"{artifact.fully_qualified_name} is abstract and can't be deployed",
                artifact.contract_name
            )

        return ContractFactory(artifact, self)

    async def get_deployer(self) -> str:
        """
        Address that will send deployment transactions

        Raises:
            DeploymentSubmissionError: node unreachable or no account available
        """
        try:
            connected = await self.w3.is_connected()
        except Exception as e:
            raise DeploymentSubmissionError(
                f"Failed to connect to {self.network.name}: {e}"
            ) from e

        if not connected:
            raise DeploymentSubmissionError(
                f"Failed to connect to {self.network.name} at {self.network.rpc_host}"
            )

        if self.account is not None:
            return self.account.address

        try:
            accounts = await self.w3.eth.accounts
        except Exception as e:
            raise DeploymentSubmissionError(f"Error listing node accounts: {e}") from e

        if not accounts:
            raise DeploymentSubmissionError(
                "No deployer account: set DEPLOYER_PRIVATE_KEY or use a node "
                "with unlocked accounts"
            )

        return accounts[0]

    async def close(self):
        """Disconnect the provider"""
        if self._closed:
            return

        self._closed = True
        disconnect = getattr(self.w3.provider, 'disconnect', None)
        if disconnect is not None:
            await disconnect()
