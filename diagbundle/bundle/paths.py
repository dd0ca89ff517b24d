from datetime import datetime
from pathlib import Path

from diagbundle.exceptions import BundleIOError
from diagbundle.logging.logger import Log

ARCHIVE_SUFFIX = ".tar.gz"
ENCRYPTED_SUFFIX = ".aes"

# Outputs of earlier runs that live next to the collected files.
ARTIFACT_SUFFIXES: tuple[str, ...] = (ARCHIVE_SUFFIX, ENCRYPTED_SUFFIX)


def default_archive_path(directory: Path) -> Path:
    """Build the archive path: {directory}/{directory name}.tar.gz"""
    directory = directory.resolve()
    return directory / f"{directory.name}{ARCHIVE_SUFFIX}"


def default_encrypted_path(directory: Path) -> Path:
    """Build the encrypted bundle path: {directory}/{directory name}.aes"""
    directory = directory.resolve()
    return directory / f"{directory.name}{ENCRYPTED_SUFFIX}"


def default_data_dir(now: datetime | None = None) -> Path:
    """Timestamped collection directory in the user's home."""
    stamp = (now or datetime.now()).strftime("%Y-%m-%d_%H_%M_%S")
    return Path.home() / f"data_collection_{stamp}"


def prepare_data_dir(data_dir: Path | None) -> Path:
    """Return the data directory, creating it when it does not exist yet."""
    path = (data_dir if data_dir is not None else default_data_dir()).expanduser()
    if not path.exists():
        Log.info(f"Creating data directory: {path}")
        try:
            path.mkdir(parents=True)
        except OSError as exc:
            raise BundleIOError("create directory", path, exc) from exc
    return path
