from dataclasses import dataclass, field


@dataclass
class StatementAccumulator:
    """Lines of the statement currently being reassembled from one file."""

    active: bool = False
    parts: list[str] = field(default_factory=list)

    def append(self, line: str) -> None:
        self.active = True
        self.parts.append(line)

    def drain(self) -> str:
        """Return the accumulated statement text and reset to empty."""
        text = "\n".join(self.parts)
        self.active = False
        self.parts = []
        return text
