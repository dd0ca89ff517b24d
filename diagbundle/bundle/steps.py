from diagbundle.archive.archiver import Archiver
from diagbundle.bundle.paths import default_encrypted_path
from diagbundle.bundle.pipeline import BundleContext, PipelineStep
from diagbundle.collection.models import CollectionCommand
from diagbundle.collection.runner import CommandRunner
from diagbundle.crypto.cipher import encrypt_file
from diagbundle.logging.logger import Log
from diagbundle.sanitization.orchestrator import SanitizationOrchestrator


class CollectStep(PipelineStep):
    def __init__(self, runner: CommandRunner, commands: list[CollectionCommand]) -> None:
        self._runner = runner
        self._commands = commands

    def run(self, context: BundleContext) -> BundleContext:
        context.collected_files = self._runner.run(self._commands, context.data_dir)
        Log.info(f"Collected {len(context.collected_files)} output files")
        return context


class SanitizeStep(PipelineStep):
    def __init__(
        self,
        orchestrator: SanitizationOrchestrator,
        sanitize_hostnames: bool,
        sanitize_queries: bool,
    ) -> None:
        self._orchestrator = orchestrator
        self._sanitize_hostnames = sanitize_hostnames
        self._sanitize_queries = sanitize_queries

    def run(self, context: BundleContext) -> BundleContext:
        context.sanitized_files = self._orchestrator.sanitize_directory(
            context.data_dir,
            sanitize_hostnames=self._sanitize_hostnames,
            sanitize_queries=self._sanitize_queries,
        )
        return context


class ArchiveStep(PipelineStep):
    def __init__(self, archiver: Archiver) -> None:
        self._archiver = archiver

    def run(self, context: BundleContext) -> BundleContext:
        context.archived_entries = self._archiver.create(context.archive_path, context.data_dir)
        Log.info(f"Archived {len(context.archived_entries)} files into {context.archive_path}")
        return context


class EncryptStep(PipelineStep):
    def __init__(self, password: str) -> None:
        self._password = password

    def run(self, context: BundleContext) -> BundleContext:
        if context.encrypted_path is None:
            context.encrypted_path = default_encrypted_path(context.data_dir)
        context.encrypted_bytes = encrypt_file(
            context.archive_path, context.encrypted_path, self._password
        )
        return context
