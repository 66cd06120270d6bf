"""Multi-row INSERT statement writer.

One writer handles one table. Rows are appended to the open statement until
it holds ``max_rows_per_statement`` rows, at which point the statement is
closed; the next row opens a new one. Rows after the first in a statement
start on a new line, indented with a tab.
"""

from enum import Enum
from io import StringIO
from typing import Any, Iterable, Optional, Sequence, TextIO

from pydantic import BaseModel

from dbdump.catalog.models import Column
from dbdump.serialization.serializer import RowSerializer
from dbdump.utils.sql import quote_identifier

DEFAULT_BATCH_SIZE = 100

ROW_SEPARATOR = "),\n\t("
STATEMENT_END = ");\n"


class BatchState(str, Enum):
    """Position of a writer in its statement lifecycle."""

    IDLE = "idle"
    OPENED = "opened"
    CLOSED = "closed"


def column_clause(columns: Sequence[Column]) -> str:
    """Build the backtick-quoted, comma separated column list."""
    return ",".join(quote_identifier(column.name) for column in columns)


def rows_per_statement(
    single_row_inserts: bool, batch_size: int = DEFAULT_BATCH_SIZE
) -> int:
    """Return 1 in single-row-insert mode, else the batch size."""
    return 1 if single_row_inserts else batch_size


class InsertBatchWriter:
    """Write serialized rows of one table as batched INSERT statements."""

    def __init__(
        self,
        table_name: str,
        columns: str,
        out: TextIO,
        max_rows_per_statement: int = DEFAULT_BATCH_SIZE,
    ):
        """
        Initialize the writer.

        Args:
            table_name: Unquoted table name
            columns: Column clause as built by column_clause()
            out: Text stream the statements are written to
            max_rows_per_statement: Row limit per INSERT statement

        Raises:
            ValueError: If max_rows_per_statement is less than 1
        """
        if max_rows_per_statement < 1:
            raise ValueError(
                "max_rows_per_statement must be at least 1, "
                f"got {max_rows_per_statement}"
            )
        self.table_name = table_name
        self.columns = columns
        self.out = out
        self.max_rows_per_statement = max_rows_per_statement
        self.state = BatchState.IDLE
        self.row_count = 0
        self.statement_count = 0
        self._rows_in_statement = 0

    def _open(self) -> None:
        self.out.write(
            f"INSERT INTO {quote_identifier(self.table_name)} ({self.columns}) VALUES("
        )
        self.state = BatchState.OPENED
        self._rows_in_statement = 0

    def _close(self) -> None:
        self.out.write(STATEMENT_END)
        self.state = BatchState.CLOSED
        self.statement_count += 1

    def write_row(self, literals: Sequence[str]) -> None:
        """
        Append one serialized row.

        Literals are written as given; they must already be quoted and
        escaped. Rows without any literal are skipped.
        """
        if not literals:
            return

        if self.state == BatchState.OPENED:
            self.out.write(ROW_SEPARATOR)
        else:
            self._open()

        self.out.write(",".join(literals))
        self._rows_in_statement += 1
        self.row_count += 1

        if self._rows_in_statement >= self.max_rows_per_statement:
            self._close()

    def write_rows(self, rows: Iterable[Sequence[str]]) -> None:
        """Append serialized rows in order, splitting statements as needed."""
        for literals in rows:
            self.write_row(literals)

    def finish(self) -> None:
        """Close a partially filled statement and return to idle."""
        if self.state == BatchState.OPENED:
            self._close()
        self.state = BatchState.IDLE


class InsertBlock(BaseModel):
    """Rendered INSERT text of one table with its counters."""

    table_name: str
    text: str = ""
    row_count: int = 0
    statement_count: int = 0


def render_insert_block(
    table_name: str,
    columns: Sequence[Column],
    rows: Iterable[Sequence[Any]],
    max_rows_per_statement: int = DEFAULT_BATCH_SIZE,
    skip_unknown_types: bool = False,
    serializer: Optional[RowSerializer] = None,
) -> InsertBlock:
    """
    Render the complete INSERT block for one table.

    Args:
        table_name: Unquoted table name
        columns: Result-set columns in row order
        rows: Raw driver rows aligned with the columns
        max_rows_per_statement: Row limit per INSERT statement
        skip_unknown_types: Emit NULL for unrecognized types instead of failing
        serializer: Pre-built serializer for the columns

    Returns:
        InsertBlock whose text is empty when there are no rows

    Raises:
        UnsupportedTypeError: If a column type is unrecognized and
            skip_unknown_types is False
    """
    serializer = serializer or RowSerializer(columns, skip_unknown_types)
    buffer = StringIO()
    writer = InsertBatchWriter(
        table_name, column_clause(columns), buffer, max_rows_per_statement
    )
    for values in rows:
        writer.write_row(serializer.serialize(values))
    writer.finish()
    return InsertBlock(
        table_name=table_name,
        text=buffer.getvalue(),
        row_count=writer.row_count,
        statement_count=writer.statement_count,
    )
