from abc import ABC, abstractmethod


class BaseFingerprinter(ABC):
    """Contract for all statement fingerprinting adapters."""

    @abstractmethod
    def fingerprint(self, statement: str) -> str:
        """Reduce a SQL statement to its literal-free canonical form.

        Args:
            statement: Statement text, possibly spanning several lines.

        Returns:
            Single-line fingerprint. Statements that differ only in literal
            values produce the same fingerprint.

        Raises:
            FingerprintError: if the statement cannot be fingerprinted.
        """
