import configparser
from pathlib import Path

from diagbundle.collection.models import ClientOptions
from diagbundle.exceptions import CollectionError
from diagbundle.logging.logger import Log


def read_client_options(path: str | Path) -> ClientOptions:
    """Read user, password, host and port from the [client] section.

    A missing file or section yields empty options.

    Raises:
        CollectionError: if the file cannot be parsed or the port is not a number.
    """
    config_path = Path(path).expanduser()
    if not config_path.is_file():
        Log.debug(f"MySQL option file {config_path} not found")
        return ClientOptions()

    # my.cnf allows bare flags such as "skip-ssl" and repeated keys.
    parser = configparser.ConfigParser(allow_no_value=True, strict=False, interpolation=None)
    try:
        parser.read(config_path, encoding="utf-8")
    except (configparser.Error, OSError, UnicodeDecodeError) as exc:
        raise CollectionError(f"Cannot read config from '{config_path}': {exc}") from exc

    if not parser.has_section("client"):
        Log.debug(f"No [client] section in {config_path}")
        return ClientOptions()

    section = parser["client"]
    port_value = section.get("port") or ""
    try:
        port = int(port_value) if port_value else 0
    except ValueError as exc:
        raise CollectionError(f"Cannot parse '{port_value}' as the port number") from exc

    return ClientOptions(
        user=section.get("user") or "",
        password=_unquote(section.get("password") or ""),
        host=section.get("host") or "",
        port=port,
    )


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value
