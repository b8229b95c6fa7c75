"""
Damm Checksum — single check digit that catches every single-digit error
and every adjacent transposition.

Architecture: fixed quasigroup table → left-to-right fold → generate / validate
Philosophy:  Malformed input is an error, never a quiet "invalid".
"""

from .exceptions import ChecksumError, MalformedInputError, TableIntegrityError
from .inspection import ChecksumInspector, inspect_number
from .models import ChecksumFinding, ChecksumReport, Severity
from .reducer import append_checksum, checksum_digit, is_valid, reduce, validate
from .table import OPERATION_TABLE, assert_table_integrity, verify_table

__version__ = "1.0.0"
__all__ = [
    "OPERATION_TABLE",
    "ChecksumError",
    "ChecksumFinding",
    "ChecksumInspector",
    "ChecksumReport",
    "MalformedInputError",
    "Severity",
    "TableIntegrityError",
    "append_checksum",
    "assert_table_integrity",
    "checksum_digit",
    "inspect_number",
    "is_valid",
    "reduce",
    "validate",
    "verify_table",
]
