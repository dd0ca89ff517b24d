from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Collection and bundling configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"

    # Directory holding the files to sanitize. A timestamped directory in the
    # user's home is created when unset.
    data_dir: Path | None = None

    sanitize_hostnames: bool = True
    sanitize_queries: bool = True
    distinct_host_placeholders: bool = False
    known_hostnames: list[str] = []
    redact_local_hostname: bool = True

    fingerprint_engine: str = "sqlparse"

    encrypt_password: str = ""

    bin_dir: str = ""
    config_file: str = "~/.my.cnf"
    mysql_host: str = ""
    mysql_port: int = 0
    mysql_user: str = ""
    mysql_pass: str = ""
    ask_mysql_pass: bool = False
    no_default_commands: bool = False
    extra_cmds: list[str] = []


class DecryptSettings(BaseSettings):
    """Configuration for turning an encrypted bundle back into its archive."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"

    input_file: Path
    output_file: Path
    password: str = ""


class SanitizeSettings(BaseSettings):
    """Configuration for fingerprinting the statements of a single file or stream."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"

    # stdin / stdout when unset
    input_file: Path | None = None
    output_file: Path | None = None

    fingerprint_engine: str = "sqlparse"
