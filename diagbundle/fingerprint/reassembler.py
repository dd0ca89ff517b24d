import re
from collections.abc import Iterable
from typing import ClassVar

from diagbundle.fingerprint.base import BaseFingerprinter
from diagbundle.fingerprint.models import StatementAccumulator
from diagbundle.logging.logger import Log


class QueryReassembler:
    """Replace SQL statements embedded in diagnostic text with fingerprints.

    Statements may span any number of lines. A line that starts with one of
    the statement prefixes opens a statement; the first line whose stripped
    text ends with ``;`` closes it. Every other line passes through as is.
    """

    STATEMENT_START_PATTERNS: ClassVar[list[re.Pattern[str]]] = [
        re.compile(pattern, re.IGNORECASE)
        for pattern in (
            r"CREATE (TABLE|VIEW|DEFINER)",
            r"DROP (DATABASE|TABLE|VIEW|DEFINER)",
            r"INSERT INTO",
            r"REPLACE INTO",
            r"UPDATE\b",
            r"SELECT\b.*\bFROM\b",
            r"SET ",
            r"SHOW TABLES",
            r"SHOW DATABASES",
            r"COMMIT\b",
            r"LOAD DATA",
        )
    ]

    def __init__(self, fingerprinter: BaseFingerprinter) -> None:
        self._fingerprinter = fingerprinter

    @classmethod
    def is_statement_start(cls, line: str) -> bool:
        return any(pattern.match(line) for pattern in cls.STATEMENT_START_PATTERNS)

    def reassemble(self, lines: Iterable[str]) -> list[str]:
        """Return *lines* with each statement collapsed to one fingerprint line."""
        output: list[str] = []
        accumulator = StatementAccumulator()
        statements = 0

        for line in lines:
            if not accumulator.active and not self.is_statement_start(line):
                output.append(line)
                continue

            accumulator.append(line)
            if line.strip().endswith(";"):
                output.append(self._fingerprinter.fingerprint(accumulator.drain()))
                statements += 1

        if accumulator.active:
            # Never emit the raw buffer: it may still hold literal values.
            Log.warning(
                f"Unterminated statement of {len(accumulator.parts)} lines "
                "at end of input, flushing its fingerprint"
            )
            output.append(self._fingerprinter.fingerprint(accumulator.drain()))
            statements += 1

        Log.debug(f"Reassembled {statements} statements")
        return output
