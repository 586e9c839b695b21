"""Startup hook for workspace encryption.

Run bootstrap_encryption() early in process startup, before any workspace
file is read. It checks whether the workspace is encrypted, loads the keys
from the Keychain and activates them for transparent decryption. It is a
no-op for workspaces without encryption.

Usage:
    result = await bootstrap_encryption(workspace_dir)
    if result.error:
        console.print(f"[yellow]{result.error}[/yellow]")
    ...
    shutdown_encryption()
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Protocol

from ..utils.logging import get_logger
from .activation import ActivationRegistry, clear_active_keys, get_activation_registry
from .keychain import CredentialStore, KeychainCredentialStore, KeyPair
from .metadata import MetadataProbe

logger = get_logger(__name__)

KEYS_MISSING_MESSAGE = (
    "Encryption is enabled but keys are not in the Keychain. "
    'Run "openclaw security unlock" to enter your password.'
)


class BootstrapState(str, Enum):
    """Terminal outcome of a bootstrap run."""

    UNCONFIGURED = "unconfigured"
    CONFIGURED_NO_KEYS = "configured_no_keys"
    CONFIGURED_ACTIVATED = "configured_activated"


@dataclass(frozen=True)
class BootstrapResult:
    """Result of bootstrapping encryption for a workspace."""

    enabled: bool
    keys_loaded: bool
    error: Optional[str] = None

    def __post_init__(self):
        if self.keys_loaded and not self.enabled:
            raise ValueError("keys_loaded requires enabled")
        if (self.error is not None) != (self.enabled and not self.keys_loaded):
            raise ValueError("error must be set exactly when enabled without keys")

    @classmethod
    def for_state(cls, state: BootstrapState) -> "BootstrapResult":
        """Build the result reported for a terminal state."""
        if state is BootstrapState.UNCONFIGURED:
            return cls(enabled=False, keys_loaded=False)
        if state is BootstrapState.CONFIGURED_NO_KEYS:
            return cls(enabled=True, keys_loaded=False, error=KEYS_MISSING_MESSAGE)
        return cls(enabled=True, keys_loaded=True)

    @property
    def state(self) -> BootstrapState:
        """Terminal state this result describes."""
        if not self.enabled:
            return BootstrapState.UNCONFIGURED
        if not self.keys_loaded:
            return BootstrapState.CONFIGURED_NO_KEYS
        return BootstrapState.CONFIGURED_ACTIVATED

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, omitting error when absent."""
        data: dict[str, Any] = {
            "enabled": self.enabled,
            "keys_loaded": self.keys_loaded,
        }
        if self.error is not None:
            data["error"] = self.error
        return data


class ConfigurationProbe(Protocol):
    """Anything that can tell whether a workspace is encrypted."""

    async def is_configured(self, workspace_dir: Path) -> bool:
        ...


def resolve_state(configured: bool, keys: Optional[KeyPair]) -> BootstrapState:
    """Decide the terminal state from the probe answer and the stored keys."""
    if not configured:
        return BootstrapState.UNCONFIGURED
    if keys is None:
        return BootstrapState.CONFIGURED_NO_KEYS
    return BootstrapState.CONFIGURED_ACTIVATED


class EncryptionBootstrapper:
    """
    Sequences probe, credential store and activation registry.

    Usage:
        bootstrapper = EncryptionBootstrapper(registry=ActivationRegistry())
        result = await bootstrapper.bootstrap(workspace_dir)
        ...
        bootstrapper.shutdown()
    """

    def __init__(
        self,
        probe: Optional[ConfigurationProbe] = None,
        store: Optional[CredentialStore] = None,
        registry: Optional[ActivationRegistry] = None,
    ):
        """
        Initialize the bootstrapper.

        Args:
            probe: Configuration probe (reads workspace metadata if not provided)
            store: Credential store (macOS Keychain if not provided)
            registry: Activation registry (process-wide if not provided)
        """
        self.probe = probe if probe is not None else MetadataProbe()
        self.store = store if store is not None else KeychainCredentialStore()
        self.registry = registry if registry is not None else get_activation_registry()

    async def bootstrap(self, workspace_dir: Path) -> BootstrapResult:
        """
        Detect encryption, load keys and activate them.

        Probe failures propagate to the caller; the three expected
        outcomes are reported in the result.

        Args:
            workspace_dir: Workspace root directory

        Returns:
            BootstrapResult
        """
        configured = await self.probe.is_configured(workspace_dir)
        # get_all() blocks on the loop thread; the probe await is the only suspension point
        keys = self.store.get_all() if configured else None

        state = resolve_state(configured, keys)
        if state is BootstrapState.CONFIGURED_ACTIVATED:
            self.registry.install(keys.workspace_key, keys.config_key)

        if state is BootstrapState.CONFIGURED_NO_KEYS:
            logger.warning("Encryption keys missing for %s", workspace_dir)
        else:
            logger.info("Encryption bootstrap for %s: %s", workspace_dir, state.value)

        return BootstrapResult.for_state(state)

    def shutdown(self) -> None:
        """Clear active keys from memory."""
        self.registry.clear()


async def bootstrap_encryption(workspace_dir: Path) -> BootstrapResult:
    """Initialize encryption for the current process."""
    return await EncryptionBootstrapper().bootstrap(workspace_dir)


# Clears keys from memory; call during graceful shutdown.
shutdown_encryption = clear_active_keys
