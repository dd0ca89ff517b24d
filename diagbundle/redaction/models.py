from dataclasses import dataclass, field


@dataclass(frozen=True)
class HostDetection:
    """A host identifier span found in one line."""

    category: str  # "hostname" or "ip_address"
    start: int
    end: int


@dataclass
class HostPlaceholderMap:
    """Run-scoped mapping from real host identifiers to placeholders.

    With ``distinct=False`` every value of a category shares one fixed token
    (``<hostname>``, ``<ip_address>``), so distinct hosts become
    indistinguishable in the output. With ``distinct=True`` each value gets its
    own numbered token (``<hostname_1>``, ``<hostname_2>``, ...), reused for
    every later occurrence in the same run.
    """

    distinct: bool = False
    _placeholders: dict[tuple[str, str], str] = field(default_factory=dict)
    _counters: dict[str, int] = field(default_factory=dict)

    def placeholder_for(self, category: str, value: str) -> str:
        key = (category, value.lower())
        placeholder = self._placeholders.get(key)
        if placeholder is None:
            if self.distinct:
                counter = self._counters.get(category, 0) + 1
                self._counters[category] = counter
                placeholder = f"<{category}_{counter}>"
            else:
                placeholder = f"<{category}>"
            self._placeholders[key] = placeholder
        return placeholder

    def __len__(self) -> int:
        return len(self._placeholders)
