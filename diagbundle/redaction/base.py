from abc import ABC, abstractmethod

from diagbundle.redaction.models import HostPlaceholderMap


class BaseRedactor(ABC):
    """Contract for line-level host identifier redaction."""

    @abstractmethod
    def new_placeholder_map(self) -> HostPlaceholderMap:
        """Return an empty placeholder map for one sanitization run."""

    @abstractmethod
    def redact(self, line: str, placeholders: HostPlaceholderMap | None = None) -> str:
        """Replace every host identifier in *line* with its placeholder.

        Args:
            line: One line of diagnostic output, SQL fingerprint or not.
            placeholders: Run-scoped map; a fresh one is used when omitted.

        Returns:
            The line with host identifiers replaced. Placeholders are never
            detected again, so redacting twice equals redacting once.
        """
