"""
The Damm operation table and the checks that make it trustworthy.

The table is a totally anti-symmetric quasigroup of order 10 with a zero
diagonal (H. Michael Damm, 2004). Those three properties are what the
algorithm's guarantees rest on:

  - every row and column is a permutation of 0-9
        → any single-digit substitution changes the fold result
  - T[T[c][x]][y] != T[T[c][y]][x] for x != y
        → any adjacent transposition changes the fold result
  - T[i][i] == 0
        → folding a number followed by its own check digit yields 0

verify_table() checks each property independently and returns findings,
the same way the report layer describes a bad number.
"""

from __future__ import annotations

from itertools import product

from .exceptions import TableIntegrityError
from .models import ChecksumFinding, Severity

ORDER = 10

# ─── The Operation Table ─────────────────────────────────────────────
# Row = interim state, column = next input digit. Must stay bit-exact.

OPERATION_TABLE: tuple[tuple[int, ...], ...] = (
    (0, 3, 1, 7, 5, 9, 8, 6, 4, 2),
    (7, 0, 9, 2, 1, 5, 4, 8, 6, 3),
    (4, 2, 0, 6, 8, 7, 1, 3, 5, 9),
    (1, 7, 5, 0, 9, 8, 3, 4, 2, 6),
    (6, 1, 2, 3, 0, 4, 5, 9, 7, 8),
    (3, 6, 7, 4, 2, 0, 9, 5, 8, 1),
    (5, 8, 6, 9, 7, 2, 0, 1, 3, 4),
    (8, 9, 4, 5, 3, 6, 2, 0, 1, 7),
    (9, 4, 3, 8, 6, 1, 7, 2, 0, 5),
    (2, 5, 8, 1, 4, 3, 6, 7, 9, 0),
)

_FULL_SET: frozenset[int] = frozenset(range(ORDER))


# ─── Orchestrator ────────────────────────────────────────────────────


def verify_table(table=OPERATION_TABLE) -> list[ChecksumFinding]:
    """Run every table check and collect findings (empty = sound table)."""
    findings = verify_shape(table)
    if findings:
        # The structural checks index into the table and assume 0-9 cells.
        return findings
    findings.extend(verify_rows(table))
    findings.extend(verify_columns(table))
    findings.extend(verify_diagonal(table))
    findings.extend(verify_anti_symmetry(table))
    return findings


def assert_table_integrity(table=OPERATION_TABLE) -> None:
    """Raise TableIntegrityError if verify_table() reports anything."""
    findings = verify_table(table)
    if findings:
        codes = sorted({f.code for f in findings})
        raise TableIntegrityError(
            f"Operation table failed {len(findings)} check(s): {', '.join(codes)}",
            {"codes": codes, "finding_count": len(findings)},
        )


# ─── Individual Checks ───────────────────────────────────────────────


def verify_shape(table) -> list[ChecksumFinding]:
    """The table must be 10x10 with integer cells in 0-9."""
    findings: list[ChecksumFinding] = []

    if len(table) != ORDER or any(len(row) != ORDER for row in table):
        findings.append(
            ChecksumFinding(
                severity=Severity.ERROR,
                code="TABLE_SHAPE",
                field="table",
                message=f"Operation table must be {ORDER}x{ORDER}.",
                details={
                    "rows": len(table),
                    "row_lengths": [len(row) for row in table],
                },
            )
        )
        return findings

    for r, c in product(range(ORDER), repeat=2):
        cell = table[r][c]
        # bool is an int subclass; a True cell is a bug, not a 1.
        if isinstance(cell, bool) or not isinstance(cell, int) or cell not in _FULL_SET:
            findings.append(
                ChecksumFinding(
                    severity=Severity.ERROR,
                    code="TABLE_CELL_RANGE",
                    field="table",
                    message=f"Cell [{r}][{c}] = {cell!r} is not a digit 0-9.",
                    details={"row": r, "column": c, "value": repr(cell)},
                )
            )

    return findings


def verify_rows(table) -> list[ChecksumFinding]:
    """Every row must be a permutation of 0-9."""
    findings: list[ChecksumFinding] = []

    for r, row in enumerate(table):
        if set(row) != _FULL_SET:
            findings.append(
                ChecksumFinding(
                    severity=Severity.ERROR,
                    code="ROW_NOT_PERMUTATION",
                    field="table",
                    message=f"Row {r} is not a permutation of 0-9: {list(row)}",
                    details={"row": r, "missing": sorted(_FULL_SET - set(row))},
                )
            )

    return findings


def verify_columns(table) -> list[ChecksumFinding]:
    """Every column must be a permutation of 0-9."""
    findings: list[ChecksumFinding] = []

    for c in range(ORDER):
        column = [table[r][c] for r in range(ORDER)]
        if set(column) != _FULL_SET:
            findings.append(
                ChecksumFinding(
                    severity=Severity.ERROR,
                    code="COLUMN_NOT_PERMUTATION",
                    field="table",
                    message=f"Column {c} is not a permutation of 0-9: {column}",
                    details={"column": c, "missing": sorted(_FULL_SET - set(column))},
                )
            )

    return findings


def verify_diagonal(table) -> list[ChecksumFinding]:
    """T[i][i] must be 0, otherwise appending the check digit does not fold to 0."""
    bad = [i for i in range(ORDER) if table[i][i] != 0]
    if not bad:
        return []
    return [
        ChecksumFinding(
            severity=Severity.ERROR,
            code="DIAGONAL_NOT_ZERO",
            field="table",
            message=f"Diagonal cells are non-zero at index(es) {bad}.",
            details={"indexes": bad},
        )
    ]


def verify_anti_symmetry(table) -> list[ChecksumFinding]:
    """Weak total anti-symmetry: no interim state lets `xy` and `yx` collide."""
    violations: list[tuple[int, int, int]] = []

    for c, x, y in product(range(ORDER), repeat=3):
        if x < y and table[table[c][x]][y] == table[table[c][y]][x]:
            violations.append((c, x, y))

    if not violations:
        return []
    return [
        ChecksumFinding(
            severity=Severity.ERROR,
            code="NOT_ANTI_SYMMETRIC",
            field="table",
            message=(
                f"{len(violations)} (state, x, y) triple(s) make the transposition "
                f"xy -> yx undetectable."
            ),
            details={"violations": [list(v) for v in violations[:10]]},
        )
    ]
