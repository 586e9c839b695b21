"""Process-wide registry of the active encryption keys.

Read paths consult the registry to decide whether workspace content
needs decrypting. Bootstrap installs the keys; shutdown clears them.
"""

import threading
from typing import Optional

from .exceptions import EncryptionLockedError
from .keychain import KeyPair


class ActivationRegistry:
    """
    Thread-safe holder of at most one active KeyPair.

    Tests and embedding callers create their own instance; the process
    default is available through get_instance().
    """

    _instance: Optional["ActivationRegistry"] = None
    _lock = threading.Lock()

    def __init__(self):
        """Initialize an empty registry (use get_instance() for the process default)."""
        self._keys: Optional[KeyPair] = None
        self._keys_lock = threading.RLock()

    @classmethod
    def get_instance(cls) -> "ActivationRegistry":
        """Get the process-wide registry."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the process-wide registry (for testing)."""
        with cls._lock:
            if cls._instance is not None:
                cls._instance.clear()
            cls._instance = None

    def install(self, workspace_key: bytes, config_key: bytes) -> None:
        """
        Activate a key pair, replacing any active one.

        Args:
            workspace_key: Key for workspace content files
            config_key: Key for the config file
        """
        keys = KeyPair(workspace_key=workspace_key, config_key=config_key)
        with self._keys_lock:
            self._keys = keys

    def clear(self) -> None:
        """Drop the active key pair. Safe to call when nothing is active."""
        with self._keys_lock:
            self._keys = None

    def current_keys(self) -> Optional[KeyPair]:
        """Get the active key pair, or None if decryption is not enabled."""
        with self._keys_lock:
            return self._keys

    def require_keys(self) -> KeyPair:
        """
        Get the active key pair or raise.

        Raises:
            EncryptionLockedError: If no keys are active
        """
        keys = self.current_keys()
        if keys is None:
            raise EncryptionLockedError()
        return keys

    @property
    def is_active(self) -> bool:
        """Check if a key pair is active."""
        return self.current_keys() is not None


# Module-level convenience functions


def get_activation_registry() -> ActivationRegistry:
    """Get the process-wide activation registry."""
    return ActivationRegistry.get_instance()


def set_active_keys(workspace_key: bytes, config_key: bytes) -> None:
    """Activate keys in the process-wide registry."""
    get_activation_registry().install(workspace_key, config_key)


def clear_active_keys() -> None:
    """Clear keys from the process-wide registry."""
    get_activation_registry().clear()


def get_active_keys() -> Optional[KeyPair]:
    """Get the keys active in the process-wide registry."""
    return get_activation_registry().current_keys()
