"""Workspace encryption bootstrap.

Decides at startup whether this process can transparently decrypt
workspace content, and holds the active keys for the read paths.

Usage:
    # At startup, before any workspace file is read
    from workspace_vault.encryption import bootstrap_encryption
    result = await bootstrap_encryption(workspace_dir)

    # In a read path
    from workspace_vault.encryption import get_active_keys
    keys = get_active_keys()
    if keys is not None:
        ...  # decrypt with keys.workspace_key

    # At shutdown
    from workspace_vault.encryption import shutdown_encryption
    shutdown_encryption()
"""

# Exceptions
from .exceptions import (
    EncryptionError,
    EncryptionLockedError,
    MetadataCorruptedError,
    WorkspaceNotFoundError,
)

# Configuration
from .config import (
    EncryptionConfig,
    get_encryption_config,
    set_encryption_config,
)

# Configuration probe
from .metadata import (
    EncryptionMetadata,
    MetadataProbe,
    is_encryption_configured,
    read_encryption_metadata,
    write_encryption_metadata,
)

# Credential store
from .keychain import (
    CredentialStore,
    KeychainCredentialStore,
    KeyPair,
    MemoryCredentialStore,
    keychain_get_all,
)

# Activation registry
from .activation import (
    ActivationRegistry,
    clear_active_keys,
    get_activation_registry,
    get_active_keys,
    set_active_keys,
)

# Bootstrap
from .bootstrap import (
    KEYS_MISSING_MESSAGE,
    BootstrapResult,
    BootstrapState,
    EncryptionBootstrapper,
    bootstrap_encryption,
    resolve_state,
    shutdown_encryption,
)

__all__ = [
    # Exceptions
    "EncryptionError",
    "EncryptionLockedError",
    "MetadataCorruptedError",
    "WorkspaceNotFoundError",
    # Configuration
    "EncryptionConfig",
    "get_encryption_config",
    "set_encryption_config",
    # Probe
    "EncryptionMetadata",
    "MetadataProbe",
    "is_encryption_configured",
    "read_encryption_metadata",
    "write_encryption_metadata",
    # Credential store
    "CredentialStore",
    "KeychainCredentialStore",
    "KeyPair",
    "MemoryCredentialStore",
    "keychain_get_all",
    # Activation
    "ActivationRegistry",
    "get_activation_registry",
    "set_active_keys",
    "clear_active_keys",
    "get_active_keys",
    # Bootstrap
    "KEYS_MISSING_MESSAGE",
    "BootstrapResult",
    "BootstrapState",
    "EncryptionBootstrapper",
    "bootstrap_encryption",
    "resolve_state",
    "shutdown_encryption",
]
