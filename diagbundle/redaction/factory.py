import socket
from collections.abc import Iterable

from diagbundle.config.settings import Settings
from diagbundle.logging.logger import Log
from diagbundle.redaction.base import BaseRedactor
from diagbundle.redaction.redactor import HostnameRedactor

# Loopback names carry no information about the customer's hosts.
_NOT_SENSITIVE = frozenset({"", "localhost", "localhost.localdomain", "127.0.0.1", "::1"})


def local_hostnames() -> list[str]:
    """Return this machine's host name and its short form."""
    name = socket.gethostname()
    return [name, name.split(".", 1)[0]]


class RedactorFactory:
    """Creates the hostname redactor configured in settings."""

    @classmethod
    def create(
        cls,
        settings: Settings,
        extra_hostnames: Iterable[str] = (),
    ) -> BaseRedactor:
        names = [*settings.known_hostnames, *extra_hostnames]
        if settings.redact_local_hostname:
            names.extend(local_hostnames())
        known = sorted({n for n in names if n.strip().lower() not in _NOT_SENSITIVE})
        Log.debug(f"Redacting {len(known)} known host names")
        return HostnameRedactor(
            known_hostnames=known,
            distinct_placeholders=settings.distinct_host_placeholders,
        )
