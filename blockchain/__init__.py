"""
Blockchain Interaction Package
Handles artifact lookup, contract deployment and confirmation
"""

from .artifacts import ArtifactStore, ContractArtifact
from .contract_factory import ContractFactory, DeployedContract
from .exceptions import (
    DeploymentError,
    TemplateNotFoundError,
    DeploymentSubmissionError,
    DeploymentConfirmationError
)
from .toolkit import DeploymentToolkit

__all__ = [
    'ArtifactStore',
    'ContractArtifact',
    'ContractFactory',
    'DeployedContract',
    'DeploymentError',
    'TemplateNotFoundError',
    'DeploymentSubmissionError',
    'DeploymentConfirmationError',
    'DeploymentToolkit'
]
