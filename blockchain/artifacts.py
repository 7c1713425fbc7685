"""
Artifact Store
Resolves contract names to Hardhat compiled artifacts (ABI + bytecode)
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from loguru import logger

from .exceptions import TemplateNotFoundError


def split_fully_qualified_name(name: str) -> Tuple[Optional[str], str]:
    """
    Split 'contracts/Token.sol:Token' into its source and contract parts

    Bare names come back with a None source.
    """
    if ':' not in name:
        return None, name

    source_name, _, contract_name = name.rpartition(':')
    return source_name, contract_name


@dataclass
class ContractArtifact:
    """Compiled contract as emitted by `npx hardhat compile`"""

    contract_name: str
    source_name: str
    abi: List[Dict]
    bytecode: str

    @property
    def fully_qualified_name(self) -> str:
        return f"{self.source_name}:{self.contract_name}"

    @property
    def is_deployable(self) -> bool:
        # Interfaces and abstract contracts compile to empty bytecode
        return self.bytecode not in ('', '0x')


class ArtifactStore:
    """
    Looks up compiled artifacts under a Hardhat artifacts directory

    Layout: <artifacts_dir>/<source path>/<ContractName>.json
    """

    def __init__(self, artifacts_dir: str = "artifacts"):
        self.artifacts_dir = Path(artifacts_dir)

    def _candidates(self, contract_name: str) -> List[Path]:
        if not self.artifacts_dir.is_dir():
            return []

        return sorted(
            path for path in self.artifacts_dir.rglob(f"{contract_name}.json")
            if 'build-info' not in path.relative_to(self.artifacts_dir).parts
        )

    def _source_of(self, path: Path) -> str:
        return path.parent.relative_to(self.artifacts_dir).as_posix()

    def find(self, name: str) -> Path:
        """
        Find the artifact file for a bare or fully qualified contract name

        Raises:
            TemplateNotFoundError: no artifact, or a bare name matching
                contracts in several source files
        """
        source_name, contract_name = split_fully_qualified_name(name)

        if source_name is not None:
            path = self.artifacts_dir / source_name / f"{contract_name}.json"
            if not path.is_file():
                raise TemplateNotFoundError(
                    f"Artifact for {name} not found in {self.artifacts_dir}",
                    contract_name
                )
            return path

        candidates = self._candidates(contract_name)

        if not candidates:
            raise TemplateNotFoundError(
                f"Artifact for contract \"{contract_name}\" not found in "
                f"{self.artifacts_dir}. Run 'npx hardhat compile' first",
                contract_name
            )

        if len(candidates) > 1:
            qualified = ', '.join(
                f"{self._source_of(path)}:{contract_name}" for path in candidates
            )
            raise TemplateNotFoundError(
                f"There are multiple artifacts for contract \"{contract_name}\", "
                f"use one of its fully qualified names: {qualified}",
                contract_name
            )

        return candidates[0]

    def read(self, name: str) -> ContractArtifact:
        """Load and validate the artifact for `name`"""
        path = self.find(name)
        _, contract_name = split_fully_qualified_name(name)

        try:
            with open(path, 'r') as f:
                artifact_json = json.load(f)
            abi = artifact_json['abi']
            bytecode = artifact_json['bytecode']
        except (OSError, ValueError, KeyError) as e:
            raise TemplateNotFoundError(
                f"Invalid artifact {path}: {e}",
                contract_name
            ) from e

        logger.debug(f"Loaded artifact {path}")

        return ContractArtifact(
            contract_name=artifact_json.get('contractName', contract_name),
            source_name=artifact_json.get('sourceName', self._source_of(path)),
            abi=abi,
            bytecode=bytecode
        )
