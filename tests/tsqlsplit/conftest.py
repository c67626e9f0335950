from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tsqlsplit import split_statements

if TYPE_CHECKING:
    from tsqlsplit import StatementSpan

# -- Script fixtures -----------------------------------------------------------


@pytest.fixture
def mixed_script() -> str:
    return (
        "-- header\n"
        "DECLARE @n INT\n"
        "SET @n = 3\n"
        "SELECT TOP (@n) * FROM users WITH (NOLOCK)\n"
        "UPDATE users SET seen = 1;\n"
        "GO\n"
        "WITH recent AS (SELECT id FROM orders) SELECT * FROM recent\n"
    )


# -- Assertion helpers ---------------------------------------------------------


def queries(sql: str) -> list[str]:
    """Return just the statement texts of ``split_statements(sql)``."""
    return [span.query for span in split_statements(sql)]


def assert_spans_consistent(sql: str, spans: list[StatementSpan]) -> None:
    """Assert the structural postconditions every result of ``split_statements`` must satisfy."""
    previous_end = 0
    for span in spans:
        assert 0 <= span.start_position < span.end_position <= len(sql), span
        assert sql[span.start_position : span.end_position] == span.query, span
        assert span.start_position >= previous_end, f"{span} overlaps the previous span"
        assert span.query == span.query.rstrip()
        assert span.query == span.query.lstrip()
        previous_end = span.end_position
