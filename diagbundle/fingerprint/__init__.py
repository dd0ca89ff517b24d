from diagbundle.fingerprint.base import BaseFingerprinter
from diagbundle.fingerprint.factory import FingerprinterFactory
from diagbundle.fingerprint.reassembler import QueryReassembler
from diagbundle.fingerprint.sqlparse_adapter import SqlparseFingerprinter

__all__ = [
    "BaseFingerprinter",
    "FingerprinterFactory",
    "QueryReassembler",
    "SqlparseFingerprinter",
]
