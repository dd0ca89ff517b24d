import os
import shutil
import subprocess
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from diagbundle.collection.models import CollectionCommand
from diagbundle.exceptions import BundleIOError, CollectionError
from diagbundle.logging.logger import Log

TOOLKIT_PROBE = "pt-summary"


def search_path(bin_dir: str = "") -> str:
    """PATH with *bin_dir* in front when it is set."""
    path = os.environ.get("PATH", os.defpath)
    if bin_dir:
        return f"{bin_dir}{os.pathsep}{path}"
    return path


def toolkit_available(bin_dir: str = "") -> bool:
    """Whether the Percona Toolkit binaries can be found."""
    return shutil.which(TOOLKIT_PROBE, path=search_path(bin_dir)) is not None


class CommandRunner:
    """Runs collection commands, one output file per command."""

    def __init__(self, bin_dir: str = "") -> None:
        self._bin_dir = bin_dir

    def run(self, commands: Iterable[CollectionCommand], data_dir: Path) -> list[Path]:
        """Run *commands* in order, stopping at the first failure.

        Returns:
            The output files written into *data_dir*.

        Raises:
            CollectionError: if a command cannot start or exits non-zero.
            BundleIOError: if an output file cannot be written.
        """
        outputs: list[Path] = []
        for command in commands:
            outputs.append(self._run_one(command, data_dir))
        return outputs

    def _run_one(self, command: CollectionCommand, data_dir: Path) -> Path:
        stamp = datetime.now().strftime("%Y-%m-%d_%H_%M_%S")
        output_file = data_dir / f"{command.program}_{stamp}.out"
        Log.info(f"Creating output file {output_file.name}")

        env = dict(os.environ)
        env["PATH"] = search_path(self._bin_dir)

        # Arguments are not logged: they may carry the MySQL password.
        Log.info(f"Executing {command.program} with {len(command.args) - 1} arguments")
        try:
            completed = subprocess.run(
                list(command.args),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                env=env,
                check=False,
            )
        except OSError as exc:
            message = f"There was a problem running {command.program}: {exc}"
            self._write(output_file, f"{message}\n".encode())
            raise CollectionError(message) from exc

        self._write(output_file, completed.stdout)
        if completed.returncode != 0:
            message = (
                f"There was a problem running {command.program}: "
                f"exit status {completed.returncode}"
            )
            self._append(output_file, f"\n{message}\n".encode())
            raise CollectionError(message)
        return output_file

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise BundleIOError("write", path, exc) from exc

    @staticmethod
    def _append(path: Path, data: bytes) -> None:
        try:
            with path.open("ab") as fh:
                fh.write(data)
        except OSError as exc:
            raise BundleIOError("write", path, exc) from exc
