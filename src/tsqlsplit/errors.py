"""Error handling for tsqlsplit.

The scanner itself never rejects SQL text: malformed or unterminated input is segmented on a best-effort basis. The
only caller-visible failure is a contract violation, such as passing something that is not a string.
"""

from __future__ import annotations


class SqlSplitError(Exception):
    """Base class for every exception raised by tsqlsplit.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SplitInputError(SqlSplitError, TypeError):
    """Raised when the value handed to :func:`~tsqlsplit.split_statements` is not text.

    The error is also a :class:`TypeError`, so callers that already guard against the built-in exception keep
    working. ``type_name`` holds the name of the offending value's type, which is handy when the value came from
    deserialized editor state and the caller wants to report it without ``repr``-ing a large object.

    Attributes:
        message: Human-readable error description.
        type_name: ``type(value).__name__`` of the rejected value.

    Examples:
        >>> from tsqlsplit import SplitInputError, split_statements
        >>> try:
        ...     split_statements(b"SELECT 1")
        ... except SplitInputError as e:
        ...     print(e.type_name)
        bytes
    """

    def __init__(self, message: str, *, type_name: str) -> None:
        """Create a SplitInputError.

        Args:
            message: Human-readable error description.
            type_name: Name of the rejected value's type.
        """
        super().__init__(message)
        self.type_name = type_name


def check_text(value: object) -> str:
    """Return *value* unchanged if it is a ``str``, otherwise raise :class:`SplitInputError`."""
    if isinstance(value, str):
        return value
    type_name = type(value).__name__
    raise SplitInputError(f"expected SQL text as str, got {type_name}", type_name=type_name)
