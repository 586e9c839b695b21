"""Workspace encryption metadata and the configuration probe.

The metadata file lives at the workspace root and is never encrypted. It
only records that encryption was set up for the workspace; keys are kept
in the credential store.
"""

import asyncio
import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from ..utils.logging import get_logger
from .config import EncryptionConfig, get_encryption_config
from .exceptions import MetadataCorruptedError, WorkspaceNotFoundError

logger = get_logger(__name__)


@dataclass
class EncryptionMetadata:
    """Contents of the workspace metadata file."""

    version: int = 1
    enabled: bool = True
    algorithm: str = "AES-256-GCM"
    created_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "version": self.version,
            "enabled": self.enabled,
            "algorithm": self.algorithm,
            "created_at": self.created_at,
        }

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EncryptionMetadata":
        """Create from dictionary."""
        if not isinstance(data, dict):
            raise MetadataCorruptedError("Encryption metadata must be a JSON object")
        enabled = data.get("enabled", True)
        if not isinstance(enabled, bool):
            raise MetadataCorruptedError(f"Invalid 'enabled' value: {enabled!r}")
        return cls(
            version=data.get("version", 1),
            enabled=enabled,
            algorithm=data.get("algorithm", "AES-256-GCM"),
            created_at=data.get("created_at", ""),
        )

    @classmethod
    def from_json(cls, json_str: str) -> "EncryptionMetadata":
        """Deserialize from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise MetadataCorruptedError(f"Invalid encryption metadata: {e}")
        return cls.from_dict(data)


def get_metadata_path(workspace_dir: Path, config: Optional[EncryptionConfig] = None) -> Path:
    """Path to the metadata file for a workspace."""
    config = config or get_encryption_config()
    return Path(workspace_dir) / config.metadata_file


def read_encryption_metadata(
    workspace_dir: Path,
    config: Optional[EncryptionConfig] = None,
) -> Optional[EncryptionMetadata]:
    """
    Load encryption metadata for a workspace.

    Args:
        workspace_dir: Workspace root directory
        config: Encryption configuration (uses global if not provided)

    Returns:
        EncryptionMetadata, or None if the workspace has no metadata file

    Raises:
        WorkspaceNotFoundError: If the workspace root does not exist
        MetadataCorruptedError: If the metadata file cannot be read or parsed
    """
    workspace_dir = Path(workspace_dir)
    if not workspace_dir.is_dir():
        raise WorkspaceNotFoundError(str(workspace_dir))

    metadata_path = get_metadata_path(workspace_dir, config)
    if not metadata_path.exists():
        return None

    try:
        content = metadata_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MetadataCorruptedError(f"Failed to read encryption metadata: {e}")

    return EncryptionMetadata.from_json(content)


def write_encryption_metadata(
    workspace_dir: Path,
    metadata: Optional[EncryptionMetadata] = None,
    config: Optional[EncryptionConfig] = None,
) -> Path:
    """
    Write encryption metadata, marking the workspace as encrypted.

    Args:
        workspace_dir: Workspace root directory
        metadata: Metadata to write (a fresh enabled record if not provided)
        config: Encryption configuration (uses global if not provided)

    Returns:
        Path to the written metadata file
    """
    if metadata is None:
        metadata = EncryptionMetadata(created_at=datetime.now().isoformat())

    metadata_path = get_metadata_path(workspace_dir, config)
    metadata_path.write_text(metadata.to_json(), encoding="utf-8")
    return metadata_path


class MetadataProbe:
    """Answers whether a workspace has encryption configured."""

    def __init__(self, config: Optional[EncryptionConfig] = None):
        self.config = config

    async def is_configured(self, workspace_dir: Path) -> bool:
        """
        Check the workspace metadata without blocking the event loop.

        Returns False when no metadata file exists. Probe faults
        (missing workspace, unreadable metadata) propagate.
        """
        metadata = await asyncio.to_thread(
            read_encryption_metadata, workspace_dir, self.config
        )
        if metadata is None:
            logger.debug("No encryption metadata in %s", workspace_dir)
            return False
        return metadata.enabled


async def is_encryption_configured(workspace_dir: Path) -> bool:
    """Check if encryption is configured for a workspace."""
    return await MetadataProbe().is_configured(workspace_dir)
