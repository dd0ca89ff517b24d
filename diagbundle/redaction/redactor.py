"""Host identifier redaction for diagnostic text.

Detection runs on each line independently:
1. Dotted IPv4 addresses, zero-padded octets included.
2. Fully qualified host names (three or more labels, alphabetic last label;
   underscores are accepted in labels).
3. Explicitly known host names, matched on token boundaries.

Overlapping spans are merged (longest first) and replaced right to left so
earlier offsets stay valid.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import ClassVar

from diagbundle.redaction.base import BaseRedactor
from diagbundle.redaction.models import HostDetection, HostPlaceholderMap

HOSTNAME = "hostname"
IP_ADDRESS = "ip_address"

_OCTET = r"(?:25[0-5]|2[0-4]\d|[01]?\d?\d)"


class HostnameRedactor(BaseRedactor):
    """Replace IP addresses and host names with placeholders."""

    _IPV4_RE: ClassVar[re.Pattern[str]] = re.compile(
        rf"(?<![\w.]){_OCTET}(?:\.{_OCTET}){{3}}(?!\w|\.\d)",
    )
    _FQDN_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"(?<![\w.-])"
        r"(?:[a-z0-9_](?:[a-z0-9_-]{0,61}[a-z0-9_])?\.){2,}"
        r"[a-z]{2,63}"
        r"(?![\w-]|\.[a-z0-9])",
        re.IGNORECASE,
    )

    def __init__(
        self,
        known_hostnames: Iterable[str] = (),
        distinct_placeholders: bool = False,
    ) -> None:
        self._distinct = distinct_placeholders
        # Longest first so a name never loses to one of its own prefixes.
        names = sorted(
            {name.strip() for name in known_hostnames if name.strip()},
            key=lambda name: (-len(name), name),
        )
        self._known_hostnames = names
        self._rules: list[tuple[str, re.Pattern[str]]] = [
            (IP_ADDRESS, self._IPV4_RE),
            (HOSTNAME, self._FQDN_RE),
        ]
        if names:
            alternatives = "|".join(re.escape(name) for name in names)
            self._rules.append(
                (HOSTNAME, re.compile(rf"(?<![\w-])(?:{alternatives})(?![\w-])", re.IGNORECASE))
            )

    @property
    def known_hostnames(self) -> list[str]:
        return list(self._known_hostnames)

    def new_placeholder_map(self) -> HostPlaceholderMap:
        return HostPlaceholderMap(distinct=self._distinct)

    def redact(self, line: str, placeholders: HostPlaceholderMap | None = None) -> str:
        if not line:
            return line
        if placeholders is None:
            placeholders = self.new_placeholder_map()

        spans = self._merge(self._detect(line))
        if not spans:
            return line

        # First pass in text order so numbered placeholders follow reading order
        replacements = [
            placeholders.placeholder_for(d.category, line[d.start:d.end]) for d in spans
        ]

        # Second pass right to left to keep offsets valid
        result = line
        for detection, placeholder in zip(reversed(spans), reversed(replacements)):
            result = result[:detection.start] + placeholder + result[detection.end:]
        return result

    def _detect(self, line: str) -> list[HostDetection]:
        detections: list[HostDetection] = []
        for category, pattern in self._rules:
            for m in pattern.finditer(line):
                detections.append(HostDetection(category, m.start(), m.end()))
        return detections

    @staticmethod
    def _merge(detections: list[HostDetection]) -> list[HostDetection]:
        """Sort by start (longest first) and fold overlapping spans together."""
        ordered = sorted(detections, key=lambda d: (d.start, -d.end))
        merged: list[HostDetection] = []
        for detection in ordered:
            if merged and detection.start < merged[-1].end:
                previous = merged[-1]
                merged[-1] = HostDetection(
                    previous.category, previous.start, max(previous.end, detection.end)
                )
            else:
                merged.append(detection)
        return merged
