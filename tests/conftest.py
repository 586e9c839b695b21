"""Shared pytest fixtures for workspace-vault tests."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture(autouse=True)
def reset_globals():
    """Give every test a fresh process-wide registry and config."""
    from workspace_vault.encryption import set_encryption_config
    from workspace_vault.encryption.activation import ActivationRegistry

    ActivationRegistry.reset_instance()
    set_encryption_config(None)
    yield
    ActivationRegistry.reset_instance()
    set_encryption_config(None)


@pytest.fixture
def workspace_dir(tmp_path: Path) -> Path:
    """Create an empty, unencrypted workspace."""
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    (workspace / "AGENTS.md").write_text("# Agents\n")
    return workspace


@pytest.fixture
def encrypted_workspace(workspace_dir: Path) -> Path:
    """Workspace with encryption metadata written."""
    from workspace_vault.encryption import write_encryption_metadata

    write_encryption_metadata(workspace_dir)
    return workspace_dir


@pytest.fixture
def key_pair():
    """Sample key pair."""
    from workspace_vault.encryption import KeyPair

    return KeyPair(workspace_key=b"wk1", config_key=b"ck1")


@pytest.fixture
def memory_store(key_pair):
    """Credential store holding the sample key pair."""
    from workspace_vault.encryption import MemoryCredentialStore

    return MemoryCredentialStore(key_pair)


@pytest.fixture
def registry():
    """Fresh activation registry, independent of the process default."""
    from workspace_vault.encryption import ActivationRegistry

    return ActivationRegistry()


def make_probe(configured: bool) -> MagicMock:
    """Probe double answering a fixed value."""
    probe = MagicMock()
    probe.is_configured = AsyncMock(return_value=configured)
    return probe


@pytest.fixture
def configured_probe() -> MagicMock:
    """Probe reporting encryption configured."""
    return make_probe(True)


@pytest.fixture
def unconfigured_probe() -> MagicMock:
    """Probe reporting encryption not configured."""
    return make_probe(False)
