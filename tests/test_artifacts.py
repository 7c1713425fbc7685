"""
Unit Tests for Hardhat Artifact Lookup
"""

import json
import pytest
from hypothesis import given, strategies as st

from blockchain.artifacts import ArtifactStore, split_fully_qualified_name
from blockchain.exceptions import TemplateNotFoundError

ABI = [{"inputs": [], "stateMutability": "nonpayable", "type": "constructor"}]


def write_artifact(root, source, name, bytecode="0x6080604052", **extra):
    """Write an artifact the way `npx hardhat compile` lays it out"""
    directory = root / source
    directory.mkdir(parents=True, exist_ok=True)
    artifact = {
        "_format": "hh-sol-artifact-1",
        "contractName": name,
        "sourceName": source,
        "abi": ABI,
        "bytecode": bytecode,
        "deployedBytecode": bytecode,
    }
    artifact.update(extra)
    (directory / f"{name}.json").write_text(json.dumps(artifact))
    (directory / f"{name}.dbg.json").write_text(json.dumps({"buildInfo": "x"}))
    return directory / f"{name}.json"


@pytest.fixture
def artifacts_dir(tmp_path):
    root = tmp_path / "artifacts"
    write_artifact(root, "contracts/Social.sol", "DecntralizedSocialMediaPlatform")
    write_artifact(root, "contracts/IPost.sol", "IPost", bytecode="0x")
    return root


class TestSplitName:
    """Fully qualified name parsing"""

    def test_bare_name(self):
        assert split_fully_qualified_name("Token") == (None, "Token")

    def test_fully_qualified_name(self):
        assert split_fully_qualified_name("contracts/Token.sol:Token") == (
            "contracts/Token.sol",
            "Token"
        )

    @given(
        source=st.from_regex(r"[A-Za-z0-9_/]{1,20}\.sol", fullmatch=True),
        name=st.from_regex(r"[A-Za-z_][A-Za-z0-9_]{0,20}", fullmatch=True)
    )
    def test_roundtrip(self, source, name):
        assert split_fully_qualified_name(f"{source}:{name}") == (source, name)


class TestArtifactStore:
    """Artifact resolution"""

    def test_find_bare_name(self, artifacts_dir):
        store = ArtifactStore(str(artifacts_dir))

        path = store.find("DecntralizedSocialMediaPlatform")

        assert path == (
            artifacts_dir / "contracts/Social.sol/DecntralizedSocialMediaPlatform.json"
        )

    def test_read(self, artifacts_dir):
        artifact = ArtifactStore(str(artifacts_dir)).read(
            "DecntralizedSocialMediaPlatform"
        )

        assert artifact.contract_name == "DecntralizedSocialMediaPlatform"
        assert artifact.source_name == "contracts/Social.sol"
        assert artifact.abi == ABI
        assert artifact.is_deployable
        assert artifact.fully_qualified_name == (
            "contracts/Social.sol:DecntralizedSocialMediaPlatform"
        )

    def test_read_fully_qualified(self, artifacts_dir):
        artifact = ArtifactStore(str(artifacts_dir)).read(
            "contracts/Social.sol:DecntralizedSocialMediaPlatform"
        )

        assert artifact.bytecode == "0x6080604052"

    def test_interface_not_deployable(self, artifacts_dir):
        artifact = ArtifactStore(str(artifacts_dir)).read("IPost")

        assert not artifact.is_deployable

    def test_missing_contract(self, artifacts_dir):
        with pytest.raises(TemplateNotFoundError) as exc_info:
            ArtifactStore(str(artifacts_dir)).find("Nope")

        assert exc_info.value.contract_name == "Nope"
        assert "npx hardhat compile" in str(exc_info.value)

    def test_missing_fully_qualified(self, artifacts_dir):
        with pytest.raises(TemplateNotFoundError):
            ArtifactStore(str(artifacts_dir)).find("contracts/Other.sol:Nope")

    def test_missing_artifacts_dir(self, tmp_path):
        with pytest.raises(TemplateNotFoundError):
            ArtifactStore(str(tmp_path / "missing")).find("Token")

    def test_dbg_files_ignored(self, artifacts_dir):
        orphan = artifacts_dir / "contracts/Orphan.sol"
        orphan.mkdir(parents=True)
        (orphan / "Orphan.dbg.json").write_text(json.dumps({"buildInfo": "x"}))

        with pytest.raises(TemplateNotFoundError):
            ArtifactStore(str(artifacts_dir)).find("Orphan")

    def test_ambiguous_name(self, artifacts_dir):
        write_artifact(artifacts_dir, "contracts/Legacy.sol", "DecntralizedSocialMediaPlatform")

        with pytest.raises(TemplateNotFoundError) as exc_info:
            ArtifactStore(str(artifacts_dir)).find("DecntralizedSocialMediaPlatform")

        message = str(exc_info.value)
        assert "contracts/Legacy.sol:DecntralizedSocialMediaPlatform" in message
        assert "contracts/Social.sol:DecntralizedSocialMediaPlatform" in message

    def test_build_info_ignored(self, artifacts_dir):
        build_info = artifacts_dir / "build-info"
        build_info.mkdir()
        (build_info / "DecntralizedSocialMediaPlatform.json").write_text("{}")

        store = ArtifactStore(str(artifacts_dir))

        assert store.find("DecntralizedSocialMediaPlatform").parent.name == "Social.sol"

    def test_invalid_json(self, artifacts_dir):
        path = write_artifact(artifacts_dir, "contracts/Broken.sol", "Broken")
        path.write_text("{not json")

        with pytest.raises(TemplateNotFoundError):
            ArtifactStore(str(artifacts_dir)).read("Broken")

    def test_missing_bytecode_key(self, artifacts_dir):
        path = write_artifact(artifacts_dir, "contracts/Half.sol", "Half")
        path.write_text(json.dumps({"abi": ABI}))

        with pytest.raises(TemplateNotFoundError):
            ArtifactStore(str(artifacts_dir)).read("Half")
