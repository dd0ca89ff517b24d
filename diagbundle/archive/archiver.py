import gzip
import tarfile
from pathlib import Path

from diagbundle.bundle.paths import ARTIFACT_SUFFIXES
from diagbundle.exceptions import ArchiveError, BundleIOError
from diagbundle.logging.logger import Log


class Archiver:
    """Packs the files of one directory into a gzip-compressed tar archive.

    Entries are named ``<directory name>/<file name>`` so extraction
    recreates the directory, and are written in name order. The gzip header
    carries no timestamp.
    """

    def __init__(self, skip_suffixes: tuple[str, ...] = ARTIFACT_SUFFIXES) -> None:
        self._skip_suffixes = skip_suffixes

    def create(self, output_path: Path, source_dir: Path) -> list[str]:
        """Write the archive of *source_dir* to *output_path*.

        Returns:
            Entry names in archive order.

        Raises:
            BundleIOError: if the directory cannot be listed or the archive
                cannot be created or written.
            ArchiveError: if an entry cannot be added. The partial archive is
                removed.
        """
        source_dir = source_dir.resolve()
        entries = self._list_entries(output_path, source_dir)

        try:
            raw = output_path.open("wb")
        except OSError as exc:
            raise BundleIOError("create archive", output_path, exc) from exc

        Log.info(f"Creating tar file {output_path} with {len(entries)} entries")
        names: list[str] = []
        try:
            with raw, gzip.GzipFile(fileobj=raw, mode="wb", mtime=0) as gz:
                with tarfile.open(fileobj=gz, mode="w") as tar:
                    for path in entries:
                        names.append(self._add_file(tar, source_dir, path))
        except ArchiveError:
            self._discard(output_path)
            raise
        except OSError as exc:
            self._discard(output_path)
            raise BundleIOError("write archive", output_path, exc) from exc

        return names

    def _list_entries(self, output_path: Path, source_dir: Path) -> list[Path]:
        try:
            candidates = sorted(source_dir.iterdir())
        except OSError as exc:
            raise BundleIOError("list", source_dir, exc) from exc

        output = output_path.resolve()
        entries: list[Path] = []
        for path in candidates:
            # Archives and encrypted bundles from previous runs
            if path.name.endswith(self._skip_suffixes) or path.resolve() == output:
                Log.debug(f"Skipping {path.name}")
                continue
            if not path.is_file():
                Log.debug(f"Skipping non-regular entry {path.name}")
                continue
            entries.append(path)
        return entries

    def _add_file(self, tar: tarfile.TarFile, source_dir: Path, path: Path) -> str:
        arcname = f"{source_dir.name}/{path.name}"
        try:
            info = tar.gettarinfo(str(path), arcname=arcname)
            with path.open("rb") as fh:
                tar.addfile(info, fh)
        except OSError as exc:
            raise ArchiveError(f"Cannot add '{path.name}' to the tar file: {exc}") from exc
        return arcname

    @staticmethod
    def _discard(output_path: Path) -> None:
        Log.warning(f"Removing incomplete archive {output_path}")
        output_path.unlink(missing_ok=True)
