from collections.abc import Iterable
from pathlib import Path

from diagbundle.bundle.paths import ARTIFACT_SUFFIXES
from diagbundle.exceptions import BundleIOError, NoFilesFoundError
from diagbundle.fingerprint.reassembler import QueryReassembler
from diagbundle.logging.logger import Log
from diagbundle.redaction.base import BaseRedactor
from diagbundle.redaction.models import HostPlaceholderMap
from diagbundle.sanitization.file_io import read_lines, write_lines


class SanitizationOrchestrator:
    """Sanitizes every file of a collection directory in place.

    Per file: read lines -> fingerprint statements -> redact hosts -> write
    back. Files are handled one at a time and the first failure aborts the
    run. One placeholder map is shared by all files of a run, so a host keeps
    the same placeholder across files.
    """

    def __init__(
        self,
        reassembler: QueryReassembler,
        redactor: BaseRedactor,
        skip_suffixes: tuple[str, ...] = ARTIFACT_SUFFIXES,
    ) -> None:
        self._reassembler = reassembler
        self._redactor = redactor
        self._skip_suffixes = skip_suffixes

    def sanitize_lines(
        self,
        lines: Iterable[str],
        sanitize_hostnames: bool,
        sanitize_queries: bool,
        placeholders: HostPlaceholderMap | None = None,
    ) -> list[str]:
        """Apply the enabled passes to one file's lines."""
        result = list(lines)
        if sanitize_queries:
            result = self._reassembler.reassemble(result)
        if sanitize_hostnames:
            if placeholders is None:
                placeholders = self._redactor.new_placeholder_map()
            result = [self._redactor.redact(line, placeholders) for line in result]
        return result

    def sanitize_directory(
        self,
        directory: Path,
        sanitize_hostnames: bool,
        sanitize_queries: bool,
    ) -> list[Path]:
        """Sanitize every regular file directly inside *directory*.

        Returns:
            The sanitized files, in name order.

        Raises:
            NoFilesFoundError: if there is no file to sanitize.
            BundleIOError: on the first listing, read or write failure.
        """
        files = self.list_files(directory)
        if not files:
            raise NoFilesFoundError(f"There are no files to sanitize in '{directory}'")

        Log.info(
            f"Sanitizing {len(files)} files in {directory} "
            f"(hostnames={sanitize_hostnames}, queries={sanitize_queries})"
        )
        placeholders = self._redactor.new_placeholder_map()
        for path in files:
            lines = read_lines(path)
            sanitized = self.sanitize_lines(
                lines,
                sanitize_hostnames=sanitize_hostnames,
                sanitize_queries=sanitize_queries,
                placeholders=placeholders,
            )
            write_lines(path, sanitized)
            Log.debug(f"Sanitized {path.name}: {len(lines)} -> {len(sanitized)} lines")

        if sanitize_hostnames:
            Log.info(f"Redacted {len(placeholders)} distinct host identifiers")
        return files

    def list_files(self, directory: Path) -> list[Path]:
        """Regular files directly inside *directory*, skipping bundle artifacts."""
        try:
            entries = sorted(directory.iterdir())
        except OSError as exc:
            raise BundleIOError("list", directory, exc) from exc

        files: list[Path] = []
        for path in entries:
            if path.name.endswith(self._skip_suffixes):
                Log.debug(f"Skipping bundle artifact {path.name}")
                continue
            if not path.is_file():
                continue
            files.append(path)
        return files
