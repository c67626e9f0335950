"""Statement splitting for T-SQL style scripts.

The scanner makes one left-to-right pass over the script.  At every position it first asks the lexer whether a string
literal or comment opens there (those are skipped wholesale), then tracks parenthesis, ``BEGIN``/``END`` and ``CASE``
nesting, and finally decides whether the current word or semicolon ends the pending statement.  Statements do not need
to be semicolon-terminated: at parenthesis depth zero a new ``SELECT``/``INSERT``/``UPDATE``/``DELETE``/``MERGE`` (or
a ``WITH`` that opens a common table expression) starts a new statement, administrative clauses such as ``DECLARE`` or
``SET`` are dropped, and control-flow keywords are never part of statement text.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tsqlsplit.errors import check_text
from tsqlsplit.keywords import TSQL, Dialect
from tsqlsplit.lexer import (
    LexicalMode,
    is_word_char,
    opening_mode,
    peek_token,
    read_word,
    skip_bracketed,
    skip_lexeme,
)
from tsqlsplit.span import StatementSpan, extract_span

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


def _is_identifier(token: str) -> bool:
    return bool(token) and (is_word_char(token[0]) or token[0] in '["')


def is_cte_header(text: str, pos: int, dialect: Dialect = TSQL) -> bool:
    """Return ``True`` if the text after a ``WITH`` ending at *pos* reads ``name [(col, ...)] AS (``.

    A statement prefix such as ``XMLNAMESPACES (`` also matches.  Only peeks; nothing is consumed.  ``WITH (NOLOCK)``
    style table hints and ``WITH TIES``-style options do not match.
    """
    name, _, pos = peek_token(text, pos)
    if not _is_identifier(name):
        return False
    token, _, pos = peek_token(text, pos)
    if name.upper() in dialect.cte_prefixes:
        return token == "("
    if token == "(":
        while True:
            column, _, pos = peek_token(text, pos)
            if not _is_identifier(column):
                return False
            separator, _, pos = peek_token(text, pos)
            if separator == ")":
                break
            if separator != ",":
                return False
        token, _, pos = peek_token(text, pos)
    if token.upper() != dialect.cte_alias:
        return False
    token, _, _ = peek_token(text, pos)
    return token == "("


class _Scanner:
    """Single-use scanner state for one :func:`split_statements` call."""

    def __init__(self, text: str, dialect: Dialect) -> None:
        self.text = text
        self.dialect = dialect
        self.spans: list[StatementSpan] = []
        self.paren_depth = 0
        self.block_depth = 0
        self.case_depth = 0
        # Pending segment
        self.segment_start = 0
        self.has_content = False
        self.kind: str | None = None
        self.in_cte = False
        self.after_set_operator = False
        self.skipping = False

    # -- segment bookkeeping -------------------------------------------------

    def _begin(self, start: int, kind: str | None = None) -> None:
        self.skipping = False
        self.segment_start = start
        self.has_content = True
        self.kind = kind
        self.in_cte = False
        self.after_set_operator = False

    def _flush(self, end: int) -> None:
        if self.has_content:
            span = extract_span(self.text, self.segment_start, end)
            if span is not None:
                self.spans.append(span)
        self.has_content = False
        self.kind = None
        self.in_cte = False
        self.after_set_operator = False
        self.case_depth = 0

    def _content(self, pos: int, *, set_operator: bool = False) -> None:
        if self.skipping:
            return
        if not self.has_content:
            self._begin(pos)
        self.after_set_operator = set_operator

    def _skip_clause(self, word: str, start: int) -> None:
        self._flush(start)
        if not self.skipping:
            logger.debug("skipping %s clause at offset %d", word, start)
        self.skipping = True

    # -- boundary decisions --------------------------------------------------

    def _on_semicolon(self, pos: int) -> None:
        if self.skipping:
            self.skipping = False
        else:
            self._flush(pos + 1)
        self.case_depth = 0

    def _on_word(self, word: str, start: int, end: int) -> None:
        dialect = self.dialect
        if word == dialect.case_open:
            self.case_depth += 1
            self._content(start)
            return
        if self.case_depth and word in (dialect.case_else, dialect.block_close):
            if word == dialect.block_close:
                self.case_depth -= 1
            self._content(start)
            return
        if self.paren_depth:
            self._content(start)
            return

        keyword_class = dialect.classify(word)
        if keyword_class == "control":
            if word == dialect.block_open:
                self.block_depth += 1
            elif word == dialect.block_close:
                self.block_depth = max(0, self.block_depth - 1)
            self._skip_clause(word, start)
        elif keyword_class == "skip":
            if self.has_content and self.kind in dialect.skip_exemptions.get(word, ()):
                self._content(start)
            else:
                self._skip_clause(word, start)
        elif keyword_class == "batch_separator":
            if self.has_content:
                self._content(start)
            else:
                self._skip_clause(word, start)
        elif keyword_class == "boundary":
            if word == dialect.cte:
                self._on_with(start, end)
            else:
                self._on_dml(word, start)
        elif word in dialect.set_operators:
            self._content(start, set_operator=True)
        elif word in dialect.set_quantifiers:
            self._content(start, set_operator=self.after_set_operator)
        else:
            self._content(start)

    def _on_dml(self, word: str, start: int) -> None:
        if self.skipping or not self.has_content:
            self._begin(start, word)
            return
        if self.in_cte:
            # The statement a CTE feeds belongs to the statement opened at WITH.
            self.in_cte = False
            self.kind = word
            self._content(start)
            return
        if self.after_set_operator and word == self.dialect.query:
            self._content(start)
            return
        if word in self.dialect.nested_dml.get(self.kind or "", ()):
            self._content(start)
            return
        self._flush(start)
        self._begin(start, word)

    def _on_with(self, start: int, end: int) -> None:
        token, _, _ = peek_token(self.text, end)
        if token != "(" and is_cte_header(self.text, end, self.dialect):
            if self.has_content and not self.in_cte:
                self._flush(start)
            if not self.has_content:
                self._begin(start)
            self.in_cte = True
            return
        # Table hint (``WITH (NOLOCK)``) or a clause option such as ``WITH TIES``.
        self._content(start)

    # -- main loop -----------------------------------------------------------

    def _tokens(self) -> Iterator[tuple[str, int, int]]:
        """Yield ``(kind, start, end)`` for every Normal-mode token; strings yield ``"literal"``."""
        text = self.text
        n = len(text)
        pos = 0
        while pos < n:
            ch = text[pos]
            if ch.isspace():
                pos += 1
                continue
            mode = opening_mode(text, pos)
            if mode is not LexicalMode.NORMAL:
                end = skip_lexeme(text, pos, mode)
                if mode is LexicalMode.SINGLE_QUOTE or mode is LexicalMode.DOUBLE_QUOTE:
                    yield "literal", pos, end
                pos = end
                continue
            if is_word_char(ch):
                end = read_word(text, pos)
                # ``alias.END`` is a column reference, not a keyword
                yield ("name" if pos and text[pos - 1] == "." else "word"), pos, end
                pos = end
                continue
            if ch == "[":
                # ``[End]`` is an identifier, never a keyword
                end = skip_bracketed(text, pos)
                yield "name", pos, end
                pos = end
                continue
            yield ch, pos, pos + 1
            pos += 1

    def run(self) -> list[StatementSpan]:
        text = self.text
        for kind, start, end in self._tokens():
            if kind == "word":
                self._on_word(text[start:end].upper(), start, end)
            elif kind == ";" and not self.paren_depth:
                self._on_semicolon(start)
            elif kind == "(":
                self.paren_depth += 1
                self._content(start)
            elif kind == ")":
                self.paren_depth = max(0, self.paren_depth - 1)
                self._content(start)
            else:
                self._content(start)
        self._flush(len(text))
        if self.block_depth:
            logger.debug("input ended inside %d unclosed BEGIN block(s)", self.block_depth)
        return self.spans


def split_statements(sql: str, *, dialect: Dialect = TSQL) -> list[StatementSpan]:
    """Split a multi-statement SQL script into individually executable statements.

    Semicolons, string literals (``'...'`` and ``"..."``, with backslash-escaped and doubled quotes), ``--`` and
    ``/* */`` comments, parenthesized subqueries, common table expressions, table hints and ``BEGIN``/``END`` blocks
    are all understood well enough to find statement boundaries; the SQL is never validated.  Statements without a
    terminating semicolon are separated at the next top-level DML keyword.  Administrative statements (``DECLARE``,
    ``SET``, ``USE``, ``CREATE``, ``EXEC``, ...), control-flow keywords, lone ``GO`` separators, empty statements and
    comment-only text are left out of the result.

    The scanner never raises for malformed SQL; an unterminated string or comment extends to the end of the input.

    Args:
        sql: A SQL script potentially containing multiple statements.
        dialect: Keyword tables to scan with.  Defaults to :data:`~tsqlsplit.keywords.TSQL`.

    Returns:
        Statement spans in source order.  Each span's ``query`` equals ``sql[start_position:end_position]``.

    Raises:
        SplitInputError: If *sql* is not a ``str``.

    Example:
        >>> from tsqlsplit import split_statements
        >>> [s.query for s in split_statements("DECLARE @n INT SET @n = 1 SELECT @n SELECT 2;")]
        ['SELECT @n', 'SELECT 2;']
        >>> split_statements("SELECT * FROM users WITH (NOLOCK)")[0].end_position
        33
    """
    text = check_text(sql)
    spans = _Scanner(text, dialect).run()
    logger.debug("split %d characters into %d statement(s)", len(text), len(spans))
    return spans
