from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO

from diagbundle.exceptions import BundleIOError

# surrogateescape keeps bytes that are not valid UTF-8 intact on the way back out.
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only; a final newline does not start another line."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def read_lines(path: Path) -> list[str]:
    """Read *path* as lines split on ``\\n`` only, without the separators.

    Raises:
        BundleIOError: if the file cannot be opened or read.
    """
    try:
        with path.open("r", encoding=_ENCODING, errors=_ERRORS, newline="") as fh:
            text = fh.read()
    except OSError as exc:
        raise BundleIOError("read", path, exc) from exc
    return split_lines(text)


def write_lines(path: Path, lines: Iterable[str]) -> None:
    """Overwrite *path* with *lines*, each terminated by ``\\n``.

    Raises:
        BundleIOError: if the file cannot be opened or written.
    """
    try:
        with path.open("w", encoding=_ENCODING, errors=_ERRORS, newline="") as fh:
            for line in lines:
                fh.write(f"{line}\n")
    except OSError as exc:
        raise BundleIOError("write", path, exc) from exc


def read_stream(stream: BinaryIO, name: str = "<stdin>") -> list[str]:
    """Like :func:`read_lines` for an already open binary stream."""
    try:
        data = stream.read()
    except OSError as exc:
        raise BundleIOError("read", name, exc) from exc
    return split_lines(data.decode(_ENCODING, _ERRORS))


def write_stream(stream: BinaryIO, lines: Iterable[str], name: str = "<stdout>") -> None:
    """Like :func:`write_lines` for an already open binary stream."""
    try:
        for line in lines:
            stream.write(f"{line}\n".encode(_ENCODING, _ERRORS))
        stream.flush()
    except OSError as exc:
        raise BundleIOError("write", name, exc) from exc
