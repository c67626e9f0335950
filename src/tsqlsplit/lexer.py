"""Lexical context tracking for the statement scanner.

These helpers classify what a position in SQL text opens (a string literal, a comment, or nothing) and jump to the
position just past the construct. None of them raise: an unterminated string or comment simply runs to the end of the
input.
"""

from __future__ import annotations

import enum

_WORD_PUNCTUATION = frozenset("_@#$")


class LexicalMode(enum.Enum):
    """Lexical context of a position in SQL text."""

    NORMAL = "normal"
    SINGLE_QUOTE = "single_quote"
    DOUBLE_QUOTE = "double_quote"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"


def is_word_char(ch: str) -> bool:
    """Return ``True`` if *ch* can be part of an identifier or keyword (``@var`` and ``#temp`` included)."""
    return ch.isalnum() or ch in _WORD_PUNCTUATION


def read_word(text: str, pos: int) -> int:
    """Return the end offset of the word starting at *pos*."""
    n = len(text)
    while pos < n and is_word_char(text[pos]):
        pos += 1
    return pos


def opening_mode(text: str, pos: int) -> LexicalMode:
    """Return the mode that the characters at *pos* open when scanned in Normal mode.

    ``NORMAL`` means *pos* does not open a string or comment.
    """
    ch = text[pos]
    if ch == "'":
        return LexicalMode.SINGLE_QUOTE
    if ch == '"':
        return LexicalMode.DOUBLE_QUOTE
    if ch == "-" and text.startswith("--", pos):
        return LexicalMode.LINE_COMMENT
    if ch == "/" and text.startswith("/*", pos):
        return LexicalMode.BLOCK_COMMENT
    return LexicalMode.NORMAL


def skip_quoted(text: str, pos: int, quote: str) -> int:
    """Return the offset just past the quote that closes a literal whose body starts at *pos*.

    A backslash directly before *quote* escapes it, and a doubled *quote* is a single literal quote; neither closes
    the literal.  Returns ``len(text)`` when the literal is unterminated.
    """
    n = len(text)
    while pos < n:
        ch = text[pos]
        if ch == "\\" and pos + 1 < n and text[pos + 1] == quote:
            pos += 2
        elif ch == quote:
            if pos + 1 < n and text[pos + 1] == quote:
                pos += 2
            else:
                return pos + 1
        else:
            pos += 1
    return n


def skip_line_comment(text: str, pos: int) -> int:
    """Return the offset of the newline ending the ``--`` comment at *pos* (or ``len(text)``)."""
    end = text.find("\n", pos + 2)
    return len(text) if end < 0 else end


def skip_block_comment(text: str, pos: int) -> int:
    """Return the offset just past the first ``*/`` after the ``/*`` at *pos* (or ``len(text)``). No nesting."""
    end = text.find("*/", pos + 2)
    return len(text) if end < 0 else end + 2


def skip_bracketed(text: str, pos: int) -> int:
    """Return the offset just past the ``]`` closing the bracketed identifier whose ``[`` is at *pos*.

    ``]]`` inside the brackets is an escaped ``]``.  Returns ``len(text)`` when the identifier is unterminated.
    """
    n = len(text)
    pos += 1
    while pos < n:
        if text[pos] == "]":
            if pos + 1 < n and text[pos + 1] == "]":
                pos += 2
                continue
            return pos + 1
        pos += 1
    return n


def skip_lexeme(text: str, pos: int, mode: LexicalMode) -> int:
    """Return the offset just past the string or comment of kind *mode* that opens at *pos*."""
    if mode is LexicalMode.SINGLE_QUOTE:
        return skip_quoted(text, pos + 1, "'")
    if mode is LexicalMode.DOUBLE_QUOTE:
        return skip_quoted(text, pos + 1, '"')
    if mode is LexicalMode.LINE_COMMENT:
        return skip_line_comment(text, pos)
    if mode is LexicalMode.BLOCK_COMMENT:
        return skip_block_comment(text, pos)
    return pos + 1


def skip_trivia(text: str, pos: int, end: int | None = None) -> int:
    """Return the first offset at or after *pos* that is neither whitespace nor inside a comment.

    Scanning stops at *end* (``len(text)`` by default); the result never exceeds it.
    """
    limit = len(text) if end is None else end
    while pos < limit:
        if text[pos].isspace():
            pos += 1
            continue
        mode = opening_mode(text, pos)
        if mode is not LexicalMode.LINE_COMMENT and mode is not LexicalMode.BLOCK_COMMENT:
            break
        pos = skip_lexeme(text, pos, mode)
    return min(pos, limit)


def has_real_content(text: str, start: int, end: int) -> bool:
    """Return ``True`` if ``text[start:end]`` holds anything besides whitespace, comments and semicolons."""
    pos = skip_trivia(text, start, end)
    while pos < end and text[pos] == ";":
        pos = skip_trivia(text, pos + 1, end)
    return pos < end


def peek_token(text: str, pos: int) -> tuple[str, int, int]:
    """Return ``(token, start, end)`` for the next token at or after *pos*, skipping whitespace and comments.

    A token is a word, a bracketed (``[name]``) or double-quoted identifier, or a single other character.  At the end
    of the input the token is the empty string.  The caller's cursor is not touched, which makes this suitable for
    lookahead.
    """
    n = len(text)
    start = skip_trivia(text, pos)
    if start >= n:
        return "", n, n
    ch = text[start]
    if is_word_char(ch):
        end = read_word(text, start)
    elif ch == "[":
        end = skip_bracketed(text, start)
    elif ch == '"':
        end = skip_quoted(text, start + 1, '"')
    else:
        end = start + 1
    return text[start:end], start, end
