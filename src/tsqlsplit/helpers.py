"""Convenience functions built on :func:`~tsqlsplit.split_statements` for editor integrations."""

from __future__ import annotations

from tsqlsplit.errors import check_text
from tsqlsplit.keywords import TSQL, Dialect
from tsqlsplit.lexer import LexicalMode, has_real_content, opening_mode, skip_lexeme
from tsqlsplit.span import StatementSpan
from tsqlsplit.split import split_statements

_COMMENT_MODES = (LexicalMode.LINE_COMMENT, LexicalMode.BLOCK_COMMENT)


def statement_at(sql: str, position: int, *, dialect: Dialect = TSQL) -> StatementSpan | None:
    """Return the statement under a cursor.

    A cursor touching either end of a statement counts as inside it, so a cursor placed right after a terminating
    semicolon still selects that statement.  When two statements share a boundary offset the earlier one wins.

    Args:
        sql: The full SQL script.
        position: 0-based cursor offset into *sql*.
        dialect: Keyword tables to scan with.

    Returns:
        The matching span, or ``None`` if the cursor sits in whitespace, a comment or a skipped clause.

    Raises:
        ValueError: If *position* is negative.
        SplitInputError: If *sql* is not a ``str``.

    Example:
        >>> sql = "SELECT 1; SELECT 2"
        >>> statement_at(sql, 12).query
        'SELECT 2'
    """
    if position < 0:
        raise ValueError(f"cursor position must be >= 0, got {position}")
    for span in split_statements(sql, dialect=dialect):
        if span.contains(position):
            return span
        if span.start_position > position:
            break
    return None


def is_only_comments(sql: str) -> bool:
    """Return ``True`` if *sql* contains nothing but comments, whitespace and semicolons.

    String literals are respected: ``'--'`` is content, not a comment.

    Example:
        >>> is_only_comments("-- header\\n/* note */ ;")
        True
        >>> is_only_comments("SELECT '--'")
        False
    """
    text = check_text(sql)
    return not has_real_content(text, 0, len(text))


def _strip_comments(text: str) -> str:
    parts: list[str] = []
    pos = 0
    n = len(text)
    start = 0
    while pos < n:
        mode = opening_mode(text, pos)
        if mode is LexicalMode.NORMAL:
            pos += 1
            continue
        end = skip_lexeme(text, pos, mode)
        if mode in _COMMENT_MODES:
            parts.append(text[start:pos])
            parts.append(" ")
            start = end
        pos = end
    parts.append(text[start:])
    return "".join(parts)


def statement_title(query: str, *, max_length: int = 30, max_words: int = 4) -> str:
    """Build a short display title for a statement, e.g. for a result tab.

    Comments are dropped, whitespace runs collapse to single spaces and the first *max_words* words are kept.  Titles
    longer than *max_length* are cut and end in ``...``.

    Example:
        >>> statement_title("-- users\\nSELECT id, name\\n  FROM users WHERE active = 1")
        'SELECT id, name FROM'
        >>> statement_title("   ")
        'Empty Query'
    """
    text = check_text(query).strip()
    if not text:
        return "Empty Query"
    words = _strip_comments(text).split()
    if not words:
        return "Query"
    title = " ".join(words[:max_words])
    if len(title) > max_length:
        title = f"{title[: max(max_length - 3, 0)]}..."
    return title
