"""Statement-boundary scanning for T-SQL style scripts."""

from tsqlsplit.errors import SplitInputError, SqlSplitError
from tsqlsplit.execute import StatementExecutor, execute_statements
from tsqlsplit.helpers import is_only_comments, statement_at, statement_title
from tsqlsplit.keywords import TSQL, Dialect
from tsqlsplit.lexer import LexicalMode
from tsqlsplit.span import StatementSpan
from tsqlsplit.split import split_statements

__all__ = [
    "Dialect",
    "execute_statements",
    "is_only_comments",
    "LexicalMode",
    "split_statements",
    "SplitInputError",
    "SqlSplitError",
    "statement_at",
    "statement_title",
    "StatementExecutor",
    "StatementSpan",
    "TSQL",
]
