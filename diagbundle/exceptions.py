from pathlib import Path


class BundleError(Exception):
    """Base exception for every stage of the diagnostic bundle pipeline."""


class NoFilesFoundError(BundleError):
    """Raised when a directory holds nothing to sanitize."""


class BundleIOError(BundleError):
    """Raised when a file or directory cannot be read, written or created."""

    def __init__(
        self,
        operation: str,
        path: Path | str,
        cause: BaseException | None = None,
    ) -> None:
        self.operation = operation
        self.path = Path(path)
        self.cause = cause
        message = f"Cannot {operation} {str(path)!r}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class ArchiveError(BundleError):
    """Raised when an entry cannot be added to the archive."""


class CipherError(BundleError):
    """Base exception for encryption and decryption failures."""


class CipherInitError(CipherError):
    """Raised when the cipher rejects the key material."""


class CollectionError(BundleError):
    """Raised when diagnostic data cannot be collected."""
