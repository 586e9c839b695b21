"""Credential store access for workspace encryption keys.

Keys are read from the macOS login Keychain with the `security` command
line tool. A missing key is a normal outcome and is reported as None.
"""

import base64
import subprocess
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from ..utils.logging import get_logger
from .config import EncryptionConfig, get_encryption_config

logger = get_logger(__name__)


@dataclass(frozen=True)
class KeyPair:
    """Workspace and config keys, as retrieved from the credential store."""

    workspace_key: bytes = field(repr=False)
    config_key: bytes = field(repr=False)


class CredentialStore(ABC):
    """Read-only source of the encryption key pair."""

    @abstractmethod
    def get_all(self) -> Optional[KeyPair]:
        """Return the key pair, or None when the keys are not stored."""


class KeychainCredentialStore(CredentialStore):
    """
    Reads both keys from the macOS Keychain.

    Each key is a generic password item under the configured service,
    stored base64 encoded. Both items must be present.
    """

    def __init__(self, config: Optional[EncryptionConfig] = None):
        self.config = config or get_encryption_config()

    def _read_item(self, account: str) -> Optional[bytes]:
        """Read one generic password item, or None if unavailable."""
        cmd = [
            self.config.security_binary,
            "find-generic-password",
            "-s", self.config.keychain_service,
            "-a", account,
            "-w",  # Print the password only
        ]

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.config.keychain_timeout_seconds,
            )
        except subprocess.CalledProcessError:
            # Item not found (exit 44) or access denied
            return None
        except FileNotFoundError:
            logger.debug("Keychain tool not found: %s", self.config.security_binary)
            return None
        except subprocess.TimeoutExpired:
            logger.warning("Timed out reading Keychain item for %s", account)
            return None
        except UnicodeDecodeError:
            logger.warning("Keychain item for %s is not valid text", account)
            return None

        value = result.stdout.strip()
        if not value:
            return None

        try:
            return base64.b64decode(value, validate=True)
        except ValueError:  # binascii.Error, or non-ASCII input
            logger.warning("Keychain item for %s is not valid base64", account)
            return None

    def get_all(self) -> Optional[KeyPair]:
        """Read the workspace and config keys from the Keychain."""
        workspace_key = self._read_item(self.config.workspace_key_account)
        if workspace_key is None:
            return None

        config_key = self._read_item(self.config.config_key_account)
        if config_key is None:
            return None

        return KeyPair(workspace_key=workspace_key, config_key=config_key)


class MemoryCredentialStore(CredentialStore):
    """In-process credential store for tests and embedding callers."""

    def __init__(self, keys: Optional[KeyPair] = None):
        self._keys = keys
        self._lock = threading.Lock()

    def put(self, workspace_key: bytes, config_key: bytes) -> None:
        """Store a key pair, replacing any existing one."""
        with self._lock:
            self._keys = KeyPair(workspace_key=workspace_key, config_key=config_key)

    def delete(self) -> bool:
        """
        Remove the stored key pair.

        Returns:
            True if keys were removed, False if none were stored
        """
        with self._lock:
            had_keys = self._keys is not None
            self._keys = None
            return had_keys

    def get_all(self) -> Optional[KeyPair]:
        with self._lock:
            return self._keys


def keychain_get_all() -> Optional[KeyPair]:
    """Get the key pair from the Keychain, or None if absent."""
    return KeychainCredentialStore().get_all()
