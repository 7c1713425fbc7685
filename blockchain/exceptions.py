"""
Deployment Exceptions
Failure taxonomy for the template -> deploy -> confirm workflow
"""

from typing import Optional


class DeploymentError(Exception):
    """Base class for every deployment failure"""

    def __init__(self, message: str, contract_name: Optional[str] = None):
        self.contract_name = contract_name
        super().__init__(message)


class TemplateNotFoundError(DeploymentError):
    """No deployable compiled artifact is known for the requested contract"""


class DeploymentSubmissionError(DeploymentError):
    """Deployment transaction could not be built, signed or broadcast"""


class DeploymentConfirmationError(DeploymentError):
    """
    Deployment transaction was sent but never confirmed

    Raised on receipt timeout or when the receipt reports a revert.
    """

    def __init__(
        self,
        message: str,
        contract_name: Optional[str] = None,
        tx_hash: Optional[str] = None
    ):
        self.tx_hash = tx_hash
        super().__init__(message, contract_name)
