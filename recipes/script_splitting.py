"""Script Splitting Recipebook: interactive examples for running T-SQL scripts one statement at a time."""

from __future__ import annotations

from typing import TYPE_CHECKING

import marimo

if TYPE_CHECKING:
    import types
    from collections.abc import Callable

    from tsqlsplit import StatementSpan

__generated_with = "0.19.11"
app = marimo.App()


@app.cell
def _(mo: types.ModuleType):
    mo.md("""
    # Script Splitting Recipebook

    Interactive recipes showing how **tsqlsplit** turns a raw T-SQL script
    into statements that can be run one at a time.

    **How to use this notebook:**

    - `marimo run recipes/script_splitting.py`: read-only app mode
    - `marimo edit recipes/script_splitting.py`: interactive editing mode
    """)
    return


@app.cell
def _():
    import marimo as mo

    from tsqlsplit import execute_statements, split_statements, statement_at, statement_title

    return execute_statements, mo, split_statements, statement_at, statement_title


@app.cell
def _(
    mo: types.ModuleType,
    split_statements: Callable[[str], list[StatementSpan]],
    statement_title: Callable[[str], str],
):
    # --- Recipe: Split a script without semicolons ---
    _script = """
    -- nightly report
    DECLARE @cutoff DATE
    SET @cutoff = DATEADD(day, -1, GETDATE())

    SELECT o.id, o.total FROM orders o WITH (NOLOCK) WHERE o.created_at >= @cutoff
    UPDATE orders SET exported = 1 WHERE created_at >= @cutoff
    GO
    WITH recent AS (SELECT customer_id FROM orders WHERE created_at >= @cutoff)
    SELECT c.name FROM customers c JOIN recent r ON r.customer_id = c.id
    """

    _spans = split_statements(_script)
    _rows = "\n".join(
        f"| {_i + 1} | `{statement_title(_s.query)}` | {_s.start_position}--{_s.end_position} |"
        for _i, _s in enumerate(_spans)
    )
    mo.md(
        f"""
        ## Recipe 1: Split a Script Without Semicolons

        `split_statements` finds statement boundaries from DML keywords when
        no semicolons are present.  `DECLARE`/`SET` clauses and the lone `GO`
        are left out, the table hint does not split, and the CTE stays
        attached to the `SELECT` it feeds.

        **{len(_spans)} statements found:**

        | # | Title | Offsets |
        |---|-------|---------|
        {_rows}
        """
    )
    return


@app.cell
def _(
    mo: types.ModuleType,
    statement_at: Callable[[str, int], StatementSpan | None],
):
    # --- Recipe: Run the statement under the cursor ---
    _editor = "SELECT * FROM users;\nSELECT * FROM orders WHERE total > 100;\n"
    _cursor = _editor.index("orders")
    _span = statement_at(_editor, _cursor)

    mo.md(
        f"""
        ## Recipe 2: Run the Statement Under the Cursor

        Editors usually execute only the statement the cursor is in.
        `statement_at` returns its span, whose offsets can be used to
        highlight the text before sending it.

        **Cursor offset:** {_cursor}

        **Statement:** `{_span.query if _span else "(none)"}`
        """
    )
    return


@app.cell
def _(
    execute_statements: Callable[..., object],
    mo: types.ModuleType,
):
    # --- Recipe: Drive an execution backend ---
    class _RecordingExecutor:
        """Stands in for a database client; records each statement it receives."""

        def __init__(self) -> None:
            self.received: list[str] = []

        def execute(self, query: str) -> int:
            self.received.append(query)
            return len(self.received)

    _executor = _RecordingExecutor()
    _results = list(execute_statements("BEGIN TRY SELECT 1 END TRY BEGIN CATCH SELECT 2 END CATCH", _executor))
    _lines = "\n".join(f"- #{_n}: `{_span.query}`" for _span, _n in _results)

    mo.md(
        f"""
        ## Recipe 3: Drive an Execution Backend

        `execute_statements` hands each statement to any object with an
        `execute(query)` method, in source order.  Control-flow keywords
        never reach the backend.

        {_lines}
        """
    )
    return


if __name__ == "__main__":
    app.run()
