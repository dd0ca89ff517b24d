from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(slots=True)
class BundleContext:
    """Accumulates paths and results as the bundle moves through the steps."""

    data_dir: Path
    archive_path: Path
    encrypted_path: Path | None = None
    collected_files: list[Path] = field(default_factory=list)
    sanitized_files: list[Path] = field(default_factory=list)
    archived_entries: list[str] = field(default_factory=list)
    encrypted_bytes: int = 0


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: BundleContext) -> BundleContext:
        raise NotImplementedError
