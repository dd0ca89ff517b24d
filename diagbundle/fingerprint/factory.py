from diagbundle.config.settings import SanitizeSettings, Settings
from diagbundle.fingerprint.base import BaseFingerprinter
from diagbundle.fingerprint.sqlparse_adapter import SqlparseFingerprinter


class FingerprinterFactory:
    """Creates the fingerprinter selected in settings."""

    ADAPTERS: dict[str, type[BaseFingerprinter]] = {
        "sqlparse": SqlparseFingerprinter,
    }

    @classmethod
    def create(cls, settings: Settings | SanitizeSettings) -> BaseFingerprinter:
        engine = settings.fingerprint_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown fingerprint engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
