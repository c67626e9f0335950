"""Feeding split statements to an execution backend one at a time.

tsqlsplit does not talk to databases.  Anything with an ``execute(query)`` method (a DB-API cursor wrapper, a client
for an out-of-process query bridge, a test double) can be driven statement by statement with
:func:`execute_statements`.  Cancellation, retries and result streaming stay the executor's business.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, TypeVar

from tsqlsplit.keywords import TSQL, Dialect
from tsqlsplit.split import split_statements

if TYPE_CHECKING:
    from collections.abc import Iterator

    from tsqlsplit.span import StatementSpan

logger = logging.getLogger(__name__)

_R_co = TypeVar("_R_co", covariant=True)


class StatementExecutor(Protocol[_R_co]):
    """Runs a single SQL statement and returns whatever result object the backend produces."""

    def execute(self, query: str) -> _R_co: ...


def execute_statements(
    sql: str, executor: StatementExecutor[_R_co], *, dialect: Dialect = TSQL
) -> Iterator[tuple[StatementSpan, _R_co]]:
    """Split *sql* and execute each statement in source order.

    The script is split up front, so a splitting problem never leaves a half-executed script behind; execution itself
    is lazy and stops as soon as the caller stops iterating.  Exceptions raised by the executor propagate unchanged
    and end the iteration.

    Args:
        sql: A SQL script potentially containing multiple statements.
        executor: Backend that runs one statement per ``execute`` call.
        dialect: Keyword tables to split with.

    Yields:
        ``(span, result)`` pairs, where *result* is the executor's return value for ``span.query``.

    Example:
        >>> class Echo:
        ...     def execute(self, query):
        ...         return query.lower()
        >>> [result for _, result in execute_statements("SELECT 1 SELECT 2", Echo())]
        ['select 1', 'select 2']
    """
    spans = split_statements(sql, dialect=dialect)
    for index, span in enumerate(spans, start=1):
        logger.debug("executing statement %d/%d at [%d, %d)", index, len(spans), span.start_position, span.end_position)
        yield span, executor.execute(span.query)
