"""Statement fingerprinting on top of the sqlparse lexer.

The lexer only tokenizes; nothing is parsed or validated. Each token is
mapped to its canonical text:

1. Comments and whitespace collapse to a single space.
2. Numbers (including binary ``0b`` literals), quoted strings and bind
   placeholders become ``?``.
3. An unterminated quote turns the rest of the statement into ``?``.
4. The result is lower-cased, then ``IN (...)`` and ``VALUES (...)`` lists
   made only of placeholders collapse to ``in(?+)`` / ``values(?+)``.

Fingerprints are fixed points: fingerprinting a fingerprint returns it
unchanged.
"""

from __future__ import annotations

import re
from typing import ClassVar

from sqlparse import lexer
from sqlparse import tokens as T
from sqlparse.tokens import _TokenType

from diagbundle.fingerprint.base import BaseFingerprinter
from diagbundle.fingerprint.exceptions import FingerprintError

_LIST_ROW = r"\(\s*\?\+?(?:\s*,\s*\?\+?)*\s*\)"


class SqlparseFingerprinter(BaseFingerprinter):
    """Literal-free statement fingerprints, MySQL flavoured."""

    PLACEHOLDER: ClassVar[str] = "?"

    _QUOTES: ClassVar[tuple[str, ...]] = ("'", '"')

    # Numeric literals the lexer reads as words: 0b1011, and 0xFF when it
    # does not reach the hex rule.
    _WORD_NUMBER_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"0b[01]+|0x[0-9a-f]+", re.IGNORECASE
    )

    _IN_LIST_RE: ClassVar[re.Pattern[str]] = re.compile(r"\bin\s*" + _LIST_ROW)
    _VALUES_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"\bvalues?\s*" + _LIST_ROW + r"(?:\s*,\s*" + _LIST_ROW + r")*"
    )

    def fingerprint(self, statement: str) -> str:
        try:
            return self._run(statement)
        except FingerprintError:
            raise
        except Exception as exc:
            raise FingerprintError(f"Fingerprinting failed: {exc}") from exc

    def _run(self, statement: str) -> str:
        parts: list[str] = []
        previous: tuple[_TokenType, str] | None = None
        pending_space = False

        for ttype, value in lexer.tokenize(statement):
            if ttype in T.Whitespace or ttype in T.Comment:
                pending_space = True
                continue

            if ttype in T.Error and value in self._QUOTES:
                # Unterminated string literal: nothing after it is safe to keep.
                text = self.PLACEHOLDER
            else:
                text = self._canonical(ttype, value, previous)

            if pending_space and parts:
                parts.append(" ")
            pending_space = False
            parts.append(text)
            previous = (ttype, value)

            if ttype in T.Error and value in self._QUOTES:
                break

        result = "".join(parts).lower()
        result = self._IN_LIST_RE.sub("in(?+)", result)
        result = self._VALUES_RE.sub("values(?+)", result)

        if statement.rstrip().endswith(";") and not result.endswith(";"):
            result += ";"
        return result

    def _canonical(
        self,
        ttype: _TokenType,
        value: str,
        previous: tuple[_TokenType, str] | None,
    ) -> str:
        if ttype in T.Number:
            # The lexer folds a leading minus into the number; keep it only
            # when it is a binary operator.
            if value.startswith("-") and self._is_operand(previous):
                return "-" + self.PLACEHOLDER
            return self.PLACEHOLDER
        if ttype in T.String or ttype in T.Name.Placeholder:
            return self.PLACEHOLDER
        if self._WORD_NUMBER_RE.fullmatch(value):
            return self.PLACEHOLDER
        if len(value) >= 2 and value[0] in self._QUOTES and value[-1] == value[0]:
            return self.PLACEHOLDER
        return value

    @staticmethod
    def _is_operand(previous: tuple[_TokenType, str] | None) -> bool:
        if previous is None:
            return False
        ttype, value = previous
        if ttype in T.Name or ttype in T.Number or ttype in T.String:
            return True
        return value == ")"
