from dataclasses import dataclass
from pathlib import Path, PurePath


@dataclass(frozen=True)
class ClientOptions:
    """Connection options from the [client] section of a MySQL option file."""

    user: str = ""
    password: str = ""
    host: str = ""
    port: int = 0


@dataclass(frozen=True)
class CommandParams:
    """Values substituted into collection command templates."""

    host: str
    port: int
    user: str
    password: str
    data_dir: Path


@dataclass(frozen=True)
class CollectionCommand:
    """One external program invocation, already split into arguments."""

    args: tuple[str, ...]

    @property
    def program(self) -> str:
        return PurePath(self.args[0]).name
