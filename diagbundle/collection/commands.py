import shlex
from collections.abc import Iterable
from pathlib import Path

from diagbundle.collection.models import ClientOptions, CollectionCommand, CommandParams
from diagbundle.config.settings import Settings
from diagbundle.exceptions import CollectionError
from diagbundle.logging.logger import Log

DEFAULT_COMMANDS: tuple[str, ...] = (
    "pt-stalk --no-stalk --iterations=2 --sleep=30 --host=$mysql-host "
    "--dest=$data-dir --port=$mysql-port --user=$mysql-user --password=$mysql-pass",
)

# Programs that must never run as part of a collection.
DENIED_PROGRAMS = frozenset({"rm", "rmdir", "fdisk"})


def resolve_params(
    settings: Settings,
    client: ClientOptions,
    data_dir: Path,
) -> CommandParams:
    """Settings win over the option file; the option file fills the gaps."""
    return CommandParams(
        host=settings.mysql_host or client.host,
        port=settings.mysql_port or client.port,
        user=settings.mysql_user or client.user,
        password=settings.mysql_pass or client.password,
        data_dir=data_dir,
    )


def command_templates(settings: Settings) -> list[str]:
    templates: list[str] = []
    if not settings.no_default_commands:
        templates.extend(DEFAULT_COMMANDS)
    templates.extend(settings.extra_cmds)
    return templates


def render(template: str, params: CommandParams) -> str:
    """Substitute placeholders, shell-quoting each value so it stays one argument."""
    substitutions = {
        "$mysql-host": params.host,
        "$mysql-port": str(params.port),
        "$mysql-user": params.user,
        "$mysql-pass": params.password,
        "$data-dir": str(params.data_dir),
    }
    for placeholder, value in substitutions.items():
        template = template.replace(placeholder, shlex.quote(value))
    return template


def build_commands(
    templates: Iterable[str],
    params: CommandParams,
) -> list[CollectionCommand]:
    """Render and split command templates, dropping denied programs.

    Raises:
        CollectionError: if a rendered command cannot be split into arguments.
    """
    commands: list[CollectionCommand] = []
    for template in templates:
        try:
            args = shlex.split(render(template, params))
        except ValueError as exc:
            # The rendered text may hold the password; report the template.
            raise CollectionError(f"Cannot parse {template!r}: {exc}") from exc
        if not args:
            continue
        command = CollectionCommand(args=tuple(args))
        if command.program in DENIED_PROGRAMS:
            Log.warning(f"Skipping disallowed command {command.program!r}")
            continue
        commands.append(command)
    return commands
