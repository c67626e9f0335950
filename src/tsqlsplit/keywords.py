"""Keyword tables that drive statement-boundary detection.

Every keyword class the scanner consults is held in a :class:`Dialect`, so supporting another keyword only means
building a new table; the scanning loop in :mod:`tsqlsplit.split` never names a keyword it could read from here.
All keywords are stored upper-case and matched case-insensitively against whole words.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Mapping


class Dialect(NamedTuple):
    """Keyword classes for one SQL dialect.

    Attributes:
        boundary: DML keywords that may start a new statement at depth zero (``WITH`` only when it opens a CTE).
        skip: Administrative keywords whose whole clause is dropped from the output.
        control: Control-flow keywords that are never part of statement text.
        batch_separator: Client-side batch separators, skipped when no statement is pending.
        set_operators: Keywords after which a ``SELECT`` continues the current statement.
        skip_exemptions: Skip keywords that are ordinary content inside statements of the given kinds.
        nested_dml: Boundary keywords that are ordinary content inside statements of the given kind.
        set_quantifiers: Words that may sit between a set operator and its ``SELECT`` (``UNION ALL SELECT``).
        query: Boundary keyword that continues a statement after a set operator.
        case_open: Keyword that opens a ``CASE`` expression, whose ``ELSE``/``END`` are not control flow.
        case_else: Control keyword that is ordinary content inside an open ``CASE``.
        block_open: Control keyword that increases block depth.
        block_close: Control keyword that decreases block depth (or closes a ``CASE``).
        cte: Boundary keyword that may open a common table expression or a table hint.
        cte_alias: Keyword separating a CTE name from its definition.
        cte_prefixes: Words that, followed by ``(``, make ``WITH`` a statement prefix just like a CTE header.
    """

    boundary: frozenset[str]
    skip: frozenset[str]
    control: frozenset[str]
    batch_separator: frozenset[str]
    set_operators: frozenset[str]
    skip_exemptions: Mapping[str, frozenset[str]]
    nested_dml: Mapping[str, frozenset[str]]
    set_quantifiers: frozenset[str] = frozenset({"ALL", "DISTINCT"})
    query: str = "SELECT"
    case_open: str = "CASE"
    case_else: str = "ELSE"
    block_open: str = "BEGIN"
    block_close: str = "END"
    cte: str = "WITH"
    cte_alias: str = "AS"
    cte_prefixes: frozenset[str] = frozenset({"XMLNAMESPACES"})

    def classify(self, word: str) -> str | None:
        """Return the keyword class name of an upper-cased *word*, or ``None`` for ordinary text.

        ``WITH`` reports ``"boundary"``; callers disambiguate CTEs from hints themselves.
        """
        if word in self.control:
            return "control"
        if word in self.boundary:
            return "boundary"
        if word in self.skip:
            return "skip"
        if word in self.batch_separator:
            return "batch_separator"
        return None


BOUNDARY_KEYWORDS: Final = frozenset({"SELECT", "INSERT", "UPDATE", "DELETE", "MERGE", "WITH"})
SKIP_KEYWORDS: Final = frozenset(
    {"DECLARE", "SET", "PRINT", "USE", "CREATE", "DROP", "ALTER", "TRUNCATE", "EXEC", "EXECUTE"}
)
CONTROL_KEYWORDS: Final = frozenset({"BEGIN", "END", "IF", "ELSE", "WHILE", "TRY", "CATCH"})
BATCH_SEPARATORS: Final = frozenset({"GO"})
SET_OPERATORS: Final = frozenset({"UNION", "EXCEPT", "INTERSECT"})

#: ``UPDATE t SET ...`` and ``MERGE ... THEN UPDATE SET ...`` assign columns; ``INSERT INTO t EXEC proc`` inserts the
#: procedure's result set.
_SKIP_EXEMPTIONS: Final[Mapping[str, frozenset[str]]] = {
    "SET": frozenset({"UPDATE", "MERGE"}),
    "EXEC": frozenset({"INSERT"}),
    "EXECUTE": frozenset({"INSERT"}),
}

#: ``INSERT ... SELECT``, ``UPDATE ... FROM (SELECT ...)`` and the ``WHEN MATCHED THEN UPDATE`` arms of a ``MERGE``.
_NESTED_DML: Final[Mapping[str, frozenset[str]]] = {
    "INSERT": frozenset({"SELECT"}),
    "UPDATE": frozenset({"SELECT"}),
    "DELETE": frozenset({"SELECT"}),
    "MERGE": frozenset({"INSERT", "UPDATE", "DELETE"}),
}

TSQL: Final = Dialect(
    boundary=BOUNDARY_KEYWORDS,
    skip=SKIP_KEYWORDS,
    control=CONTROL_KEYWORDS,
    batch_separator=BATCH_SEPARATORS,
    set_operators=SET_OPERATORS,
    skip_exemptions=_SKIP_EXEMPTIONS,
    nested_dml=_NESTED_DML,
)
