"""
Contract Factory
Deploys compiled contracts and waits for their confirmation
"""

from typing import Dict, List, Optional
from web3 import Web3
from web3.exceptions import TimeExhausted
from loguru import logger

from .artifacts import ContractArtifact
from .exceptions import DeploymentConfirmationError, DeploymentSubmissionError


class DeployedContract:
    """
    Handle for a submitted deployment

    `address` stays None until `deployed()` has seen a successful receipt.
    """

    def __init__(
        self,
        w3,
        contract_name: str,
        abi: List[Dict],
        deploy_transaction_hash: str,
        confirmation_timeout: float = 120
    ):
        self.w3 = w3
        self.contract_name = contract_name
        self.abi = abi
        self.deploy_transaction_hash = deploy_transaction_hash
        self.confirmation_timeout = confirmation_timeout

        self.address: Optional[str] = None
        self.receipt = None

    async def deployed(self) -> 'DeployedContract':
        """
        Wait until the deployment transaction is mined

        Returns:
            self, with `address` and `receipt` set

        Raises:
            DeploymentConfirmationError: on timeout or reverted deployment
        """
        if self.address is not None:
            return self

        logger.info(f"Waiting for confirmation of {self.deploy_transaction_hash}...")

        try:
            receipt = await self.w3.eth.wait_for_transaction_receipt(
                self.deploy_transaction_hash,
                timeout=self.confirmation_timeout
            )
        except TimeExhausted as e:
            raise DeploymentConfirmationError(
                f"{self.contract_name} deployment {self.deploy_transaction_hash} "
                f"not confirmed after {self.confirmation_timeout} seconds",
                self.contract_name,
                self.deploy_transaction_hash
            ) from e
        except Exception as e:
            raise DeploymentConfirmationError(
                f"Error waiting for {self.contract_name} deployment: {e}",
                self.contract_name,
                self.deploy_transaction_hash
            ) from e

        if receipt['status'] != 1 or not receipt.get('contractAddress'):
            raise DeploymentConfirmationError(
                f"{self.contract_name} deployment {self.deploy_transaction_hash} "
                f"reverted in block {receipt.get('blockNumber')}",
                self.contract_name,
                self.deploy_transaction_hash
            )

        self.receipt = receipt
        self.address = Web3.to_checksum_address(receipt['contractAddress'])

        logger.success(f"{self.contract_name} confirmed at {self.address}")
        logger.info(f"Gas used: {receipt.get('gasUsed')}")
        return self

    def instance(self):
        """web3 contract object bound to the deployed address"""
        if self.address is None:
            raise DeploymentConfirmationError(
                f"{self.contract_name} deployment is not confirmed yet",
                self.contract_name,
                self.deploy_transaction_hash
            )

        return self.w3.eth.contract(address=self.address, abi=self.abi)


class ContractFactory:
    """
    Deploys one compiled contract type

    Args:
        artifact: Compiled contract (ABI + bytecode)
        toolkit: DeploymentToolkit providing web3, signer and network settings
    """

    # Buffer on top of the node's gas estimate
    GAS_BUFFER = 1.2

    def __init__(self, artifact: ContractArtifact, toolkit):
        self.artifact = artifact
        self.toolkit = toolkit

    @property
    def contract_name(self) -> str:
        return self.artifact.contract_name

    @property
    def abi(self) -> List[Dict]:
        return self.artifact.abi

    @property
    def bytecode(self) -> str:
        return self.artifact.bytecode

    async def _estimate_gas(self, constructor, deployer: str) -> int:
        try:
            gas_estimate = await constructor.estimate_gas({'from': deployer})
            return int(gas_estimate * self.GAS_BUFFER)
        except Exception as e:
            gas_limit = self.toolkit.network.default_gas_limit
            logger.warning(f"Gas estimation failed: {e}, using default {gas_limit}")
            return gas_limit

    async def deploy(self, *args) -> DeployedContract:
        """
        Submit the deployment transaction

        Args:
            *args: Constructor arguments

        Returns:
            Pending DeployedContract (call `deployed()` to wait for it)

        Raises:
            DeploymentSubmissionError: if the transaction cannot be sent
        """
        w3 = self.toolkit.w3
        network = self.toolkit.network
        account = self.toolkit.account

        deployer = await self.toolkit.get_deployer()

        logger.info(f"Deploying {self.contract_name} from {deployer}")

        try:
            contract = w3.eth.contract(abi=self.abi, bytecode=self.bytecode)
            constructor = contract.constructor(*args)

            gas_limit = await self._estimate_gas(constructor, deployer)
            logger.info(f"Gas limit: {gas_limit}")

            tx_params = {'from': deployer, 'gas': gas_limit}
            if network.chain_id is not None:
                tx_params['chainId'] = network.chain_id

            if account is not None:
                tx_params['nonce'] = await w3.eth.get_transaction_count(
                    deployer,
                    'pending'
                )
                transaction = await constructor.build_transaction(tx_params)

                logger.info("Signing transaction...")
                signed_tx = account.sign_transaction(transaction)
                tx_hash = await w3.eth.send_raw_transaction(signed_tx.raw_transaction)
            else:
                # Node signs with its unlocked account
                tx_hash = await constructor.transact(tx_params)

        except Exception as e:
            raise DeploymentSubmissionError(
                f"Error submitting {self.contract_name} deployment: {e}",
                self.contract_name
            ) from e

        tx_hash = Web3.to_hex(tx_hash)
        logger.info(f"Transaction sent: {tx_hash}")

        return DeployedContract(
            w3,
            self.contract_name,
            self.abi,
            tx_hash,
            confirmation_timeout=network.confirmation_timeout
        )
