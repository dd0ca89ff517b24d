from pathlib import Path

import pytest
from pydantic import ValidationError

from diagbundle.config.settings import DecryptSettings, Settings


class TestSettingsDefaults:
    def test_sanitization_enabled_by_default(self) -> None:
        s = Settings(_env_file=None)
        assert s.sanitize_hostnames is True
        assert s.sanitize_queries is True
        assert s.distinct_host_placeholders is False

    def test_default_log_level(self) -> None:
        s = Settings(_env_file=None)
        assert s.log_level == "INFO"

    def test_default_fingerprint_engine(self) -> None:
        s = Settings(_env_file=None)
        assert s.fingerprint_engine == "sqlparse"

    def test_no_encryption_by_default(self) -> None:
        s = Settings(_env_file=None)
        assert s.encrypt_password == ""

    def test_default_connection(self) -> None:
        s = Settings(_env_file=None)
        assert s.config_file == "~/.my.cnf"
        assert s.mysql_port == 0
        assert s.data_dir is None
        assert s.extra_cmds == []


class TestSettingsFromEnv:
    def test_loads_toggles(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SANITIZE_HOSTNAMES", "false")
        monkeypatch.setenv("SANITIZE_QUERIES", "0")
        s = Settings(_env_file=None)
        assert s.sanitize_hostnames is False
        assert s.sanitize_queries is False

    def test_loads_data_dir(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("DATA_DIR", str(tmp_path))
        s = Settings(_env_file=None)
        assert s.data_dir == tmp_path

    def test_loads_port(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MYSQL_PORT", "3307")
        s = Settings(_env_file=None)
        assert s.mysql_port == 3307

    def test_loads_lists_as_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KNOWN_HOSTNAMES", '["db-host-01", "replica-2"]')
        monkeypatch.setenv("EXTRA_CMDS", '["mysqladmin status"]')
        s = Settings(_env_file=None)
        assert s.known_hostnames == ["db-host-01", "replica-2"]
        assert s.extra_cmds == ["mysqladmin status"]

    def test_loads_from_env_file(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("ENCRYPT_PASSWORD=s3cret\nUNRELATED=ignored\n")
        s = Settings(_env_file=env_file)
        assert s.encrypt_password == "s3cret"

    def test_invalid_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MYSQL_PORT", "abc")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)


class TestDecryptSettings:
    def test_requires_paths(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("INPUT_FILE", raising=False)
        monkeypatch.delenv("OUTPUT_FILE", raising=False)
        with pytest.raises(ValidationError):
            DecryptSettings(_env_file=None)

    def test_loads_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INPUT_FILE", "/tmp/bundle.aes")
        monkeypatch.setenv("OUTPUT_FILE", "/tmp/bundle.tar.gz")
        s = DecryptSettings(_env_file=None)
        assert s.input_file == Path("/tmp/bundle.aes")
        assert s.output_file == Path("/tmp/bundle.tar.gz")
        assert s.password == ""
