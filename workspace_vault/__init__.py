"""workspace-vault - Encryption bootstrap for workspace content."""

__version__ = "0.1.0"

from .encryption import BootstrapResult, bootstrap_encryption, shutdown_encryption

__all__ = [
    "__version__",
    "BootstrapResult",
    "bootstrap_encryption",
    "shutdown_encryption",
]
