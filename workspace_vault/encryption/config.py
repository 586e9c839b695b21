"""Configuration for workspace encryption bootstrap."""

import os
from dataclasses import dataclass


@dataclass
class EncryptionConfig:
    """Configuration for locating encryption metadata and keys."""

    # Workspace metadata
    metadata_file: str = "encryption.meta"

    # Keychain item naming
    keychain_service: str = "openclaw-encryption"
    workspace_key_account: str = "workspace-key"
    config_key_account: str = "config-key"

    # macOS Keychain command line tool
    security_binary: str = "security"
    keychain_timeout_seconds: float = 10.0

    @classmethod
    def from_env(cls) -> "EncryptionConfig":
        """
        Load configuration from environment variables.

        Environment variables:
            ENCRYPTION_METADATA_FILE: Metadata file name (default: encryption.meta)
            ENCRYPTION_KEYCHAIN_SERVICE: Keychain service name (default: openclaw-encryption)
            ENCRYPTION_SECURITY_BINARY: Path to the `security` tool (default: security)
        """
        config = cls()

        if metadata_file := os.getenv("ENCRYPTION_METADATA_FILE"):
            config.metadata_file = metadata_file

        if service := os.getenv("ENCRYPTION_KEYCHAIN_SERVICE"):
            config.keychain_service = service

        if binary := os.getenv("ENCRYPTION_SECURITY_BINARY"):
            config.security_binary = binary

        return config


# Global configuration instance
_config: EncryptionConfig | None = None


def get_encryption_config() -> EncryptionConfig:
    """Get the global encryption configuration."""
    global _config
    if _config is None:
        _config = EncryptionConfig.from_env()
    return _config


def set_encryption_config(config: EncryptionConfig | None) -> None:
    """Set the global encryption configuration (None reloads from env)."""
    global _config
    _config = config
