from pathlib import Path

from diagbundle.archive.archiver import Archiver
from diagbundle.bundle.paths import default_archive_path
from diagbundle.bundle.pipeline import BundleContext, PipelineStep
from diagbundle.bundle.steps import ArchiveStep, CollectStep, EncryptStep, SanitizeStep
from diagbundle.collection.commands import build_commands, command_templates, resolve_params
from diagbundle.collection.mycnf import read_client_options
from diagbundle.collection.runner import CommandRunner, toolkit_available
from diagbundle.config.settings import Settings
from diagbundle.exceptions import CollectionError
from diagbundle.fingerprint.factory import FingerprinterFactory
from diagbundle.fingerprint.reassembler import QueryReassembler
from diagbundle.logging.logger import Log
from diagbundle.redaction.factory import RedactorFactory
from diagbundle.sanitization.orchestrator import SanitizationOrchestrator


class Bundler:
    """Runs the bundle pipeline over one data directory.

    Pipeline: collect -> sanitize -> archive -> encrypt. Steps run strictly in
    order and the first error propagates to the caller.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    @property
    def steps(self) -> list[PipelineStep]:
        return list(self._steps)

    def run(self, data_dir: Path) -> BundleContext:
        context = BundleContext(
            data_dir=data_dir,
            archive_path=default_archive_path(data_dir),
        )
        Log.info(f"Building diagnostic bundle from {data_dir}")
        for step in self._steps:
            Log.debug(f"Running {type(step).__name__}")
            context = step.run(context)
        Log.info(f"Bundle ready: {context.encrypted_path or context.archive_path}")
        return context


def build_bundler(settings: Settings, data_dir: Path) -> Bundler:
    """Build a Bundler with every step the settings enable.

    Raises:
        CollectionError: if the option file is unreadable or the default
            commands are enabled but the toolkit cannot be found.
    """
    client = read_client_options(settings.config_file)
    params = resolve_params(settings, client, data_dir)
    commands = build_commands(command_templates(settings), params)

    steps: list[PipelineStep] = []
    if commands:
        if not settings.no_default_commands and not toolkit_available(settings.bin_dir):
            raise CollectionError(
                "Cannot find Percona Toolkit binaries. "
                "Please run this tool again setting bin_dir"
            )
        steps.append(CollectStep(CommandRunner(settings.bin_dir), commands))

    reassembler = QueryReassembler(FingerprinterFactory.create(settings))
    redactor = RedactorFactory.create(settings, extra_hostnames=[params.host])
    orchestrator = SanitizationOrchestrator(reassembler, redactor)
    steps.append(
        SanitizeStep(
            orchestrator,
            sanitize_hostnames=settings.sanitize_hostnames,
            sanitize_queries=settings.sanitize_queries,
        )
    )
    steps.append(ArchiveStep(Archiver()))

    if settings.encrypt_password:
        steps.append(EncryptStep(settings.encrypt_password))

    return Bundler(steps)
