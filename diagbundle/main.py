import sys
from getpass import getpass

from diagbundle.bundle.bundler import build_bundler
from diagbundle.bundle.paths import prepare_data_dir
from diagbundle.config.settings import DecryptSettings, SanitizeSettings, Settings
from diagbundle.crypto.cipher import decrypt_file
from diagbundle.exceptions import BundleError
from diagbundle.fingerprint.factory import FingerprinterFactory
from diagbundle.fingerprint.reassembler import QueryReassembler
from diagbundle.logging.logger import Log
from diagbundle.sanitization.file_io import read_lines, read_stream, write_lines, write_stream


def main() -> None:
    """Entry point: settings -> data dir -> collect, sanitize, archive, encrypt."""
    settings = Settings(_cli_parse_args=True)
    Log.configure(settings.log_level)

    if settings.ask_mysql_pass:
        password = getpass(f"MySQL password for user {settings.mysql_user!r}: ")
        settings = settings.model_copy(update={"mysql_pass": password})

    try:
        data_dir = prepare_data_dir(settings.data_dir)
        Log.info(f"Data directory is {data_dir}")
        bundler = build_bundler(settings, data_dir)
        bundler.run(data_dir)
    except (BundleError, ValueError) as exc:
        # ValueError: unknown adapter name from a factory
        Log.error(f"Cannot build the diagnostic bundle: {exc}")
        sys.exit(1)


def sanitize_main() -> None:
    """Entry point: fingerprint the statements of one file, stdin to stdout by default."""
    settings = SanitizeSettings(_cli_parse_args=True)
    # stdout may carry the sanitized text
    Log.configure(settings.log_level, stream=sys.stderr)

    try:
        reassembler = QueryReassembler(FingerprinterFactory.create(settings))
        if settings.input_file is not None:
            lines = read_lines(settings.input_file)
        else:
            lines = read_stream(sys.stdin.buffer)

        sanitized = reassembler.reassemble(lines)

        if settings.output_file is not None:
            write_lines(settings.output_file, sanitized)
        else:
            write_stream(sys.stdout.buffer, sanitized)
    except (BundleError, ValueError) as exc:
        Log.error(f"Cannot sanitize queries: {exc}")
        sys.exit(1)


def decrypt_main() -> None:
    """Entry point: decrypt an encrypted bundle back into its archive."""
    settings = DecryptSettings(_cli_parse_args=True)
    Log.configure(settings.log_level)

    password = settings.password or getpass("Please enter the password to decrypt the file: ")
    try:
        decrypt_file(settings.input_file, settings.output_file, password)
    except BundleError as exc:
        Log.error(f"Cannot decrypt {settings.input_file}: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
