"""Statement spans and the segment extractor."""

from __future__ import annotations

from typing import NamedTuple

from tsqlsplit.lexer import has_real_content


class StatementSpan(NamedTuple):
    """One executable statement found in a SQL script.

    ``query`` is always the exact slice ``sql[start_position:end_position]`` of the script it came from, so editors
    can highlight or replace it without re-searching the text.

    Attributes:
        query: Statement text, without leading or trailing whitespace.
        start_position: 0-based offset of the first character of the statement.
        end_position: 0-based offset just past the last character of the statement.
    """

    query: str
    start_position: int
    end_position: int

    def contains(self, position: int) -> bool:
        """Return ``True`` if a cursor at *position* touches this statement (both ends inclusive)."""
        return self.start_position <= position <= self.end_position


def extract_span(text: str, start: int, end: int) -> StatementSpan | None:
    """Materialize the pending segment ``text[start:end]`` as a span.

    Trailing whitespace is trimmed.  Returns ``None`` when the segment is empty or holds only whitespace, comments and
    semicolons.
    """
    while end > start and text[end - 1].isspace():
        end -= 1
    if not has_real_content(text, start, end):
        return None
    return StatementSpan(text[start:end], start, end)
