"""Script generation: batched INSERT statements, DDL sections and output."""

from dbdump.script.batch import (
    DEFAULT_BATCH_SIZE,
    BatchState,
    InsertBatchWriter,
    InsertBlock,
    column_clause,
    render_insert_block,
    rows_per_statement,
)
from dbdump.script.emitter import ScriptEmitter, mask_url
from dbdump.script.sink import ScriptSink

__all__ = [
    # Batch writer
    "DEFAULT_BATCH_SIZE",
    "BatchState",
    "InsertBatchWriter",
    "InsertBlock",
    "column_clause",
    "render_insert_block",
    "rows_per_statement",
    # Emitter
    "ScriptEmitter",
    "ScriptSink",
    "mask_url",
]
