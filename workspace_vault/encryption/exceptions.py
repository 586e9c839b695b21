"""Exceptions for workspace encryption bootstrap."""


class EncryptionError(Exception):
    """Base exception for workspace encryption operations."""

    pass


class WorkspaceNotFoundError(EncryptionError):
    """Raised when the workspace root does not exist."""

    def __init__(self, path: str = ""):
        message = f"Workspace not found: {path}" if path else "Workspace not found."
        super().__init__(message)


class MetadataCorruptedError(EncryptionError):
    """Raised when encryption metadata exists but cannot be read."""

    def __init__(self, message: str = "Encryption metadata is corrupted."):
        super().__init__(message)


class EncryptionLockedError(EncryptionError):
    """Raised when a read path needs keys but none are active."""

    def __init__(self, message: str = "Encryption keys are not active."):
        super().__init__(message)
