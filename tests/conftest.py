from pathlib import Path

import pytest

from diagbundle.fingerprint.reassembler import QueryReassembler
from diagbundle.fingerprint.sqlparse_adapter import SqlparseFingerprinter
from diagbundle.redaction.redactor import HostnameRedactor
from diagbundle.sanitization.orchestrator import SanitizationOrchestrator

SLOW_LOG = """\
# Time: 2024-01-01T10:00:00.123456Z
# User@Host: app[app] @ app-server-3 [10.1.2.3]
# Query_time: 2.000000  Lock_time: 0.000100 Rows_sent: 1  Rows_examined: 50000
SELECT * FROM orders
WHERE customer_email = 'alice@example.com'
  AND total > 1500;
"""

PROCESSLIST = """\
*************************** 1. row ***************************
     Id: 12
   User: app
   Host: app-server-3:51234
     db: shop
Command: Query
   Info: running
UPDATE accounts SET balance = 90
WHERE id = 7;
"""

VARIABLES = """\
hostname\tdb-host-01
report_host\tdb-host-01.prod.example.com
bind_address\t192.168.10.5
"""


@pytest.fixture()
def orchestrator() -> SanitizationOrchestrator:
    """Orchestrator with the real fingerprinter and a fixed set of known hosts."""
    reassembler = QueryReassembler(SqlparseFingerprinter())
    redactor = HostnameRedactor(known_hostnames=["db-host-01", "app-server-3"])
    return SanitizationOrchestrator(reassembler, redactor)


@pytest.fixture()
def diagnostic_dir(tmp_path: Path) -> Path:
    """A collection directory holding typical raw diagnostic output."""
    directory = tmp_path / "data_collection_2024-01-01_10_00_00"
    directory.mkdir()
    (directory / "slow.log").write_text(SLOW_LOG)
    (directory / "processlist.out").write_text(PROCESSLIST)
    (directory / "variables.out").write_text(VARIABLES)
    return directory
