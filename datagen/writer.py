"""
Script writer for the BATCHINSERT dialect.

Emits, to any text stream:

    <pre query>;
    CREATE TABLE t (c1 int,c2 string) STORED AS parquet TBLPROPERTIES('k'='v');
    BATCHINSERT INTO t BATCHVALUES(VALUES (1,ab),VALUES (2,cd));
    <post query>;

Rows are framed by a two-state machine: IDLE until a row arrives, IN_GROUP
while a group is being buffered. A group is flushed with `);\\n` once it holds
`batch_size` rows or the rows run out, so at most one group of text is held
in memory and no opened group is ever left unclosed.
"""

from __future__ import annotations

import enum
from typing import Iterable, List, Mapping, Sequence, TextIO

from datagen.domain.columns import ColumnDef
from datagen.utils.logging import get_logger

log = get_logger(__name__)


class FrameState(enum.Enum):
    IDLE = "idle"
    IN_GROUP = "in_group"


class ScriptWriter:
    """
    Write one generated SQL script to `stream`.

    The writer never opens or closes the stream; the caller owns it.
    """

    def __init__(self, stream: TextIO, table_name: str, batch_size: int) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self._stream = stream
        self.table_name = table_name
        self.batch_size = batch_size
        self.state = FrameState.IDLE
        self._group: List[str] = []
        self.bytes_written = 0

    def _write(self, text: str) -> None:
        self._stream.write(text)
        self.bytes_written += len(text.encode("utf-8"))

    def write_statements(self, queries: Iterable[str]) -> None:
        """Write each statement verbatim followed by `;\\n`."""
        for query in queries:
            self._write(f"{query};\n")

    def create_table_sql(
        self,
        columns: Sequence[ColumnDef],
        storage_format: str,
        table_props: Mapping[str, str],
    ) -> str:
        ddl = ",".join(column.ddl() for column in columns)
        sql = f"CREATE TABLE {self.table_name} ({ddl}) STORED AS {storage_format}"
        if table_props:
            props = ",".join(f"'{key}'='{value}'" for key, value in table_props.items())
            sql += f" TBLPROPERTIES({props})"
        return sql + ";\n"

    def write_create_table(
        self,
        columns: Sequence[ColumnDef],
        storage_format: str,
        table_props: Mapping[str, str],
    ) -> None:
        self._write(self.create_table_sql(columns, storage_format, table_props))

    def _open_group(self) -> None:
        self._group = [f"BATCHINSERT INTO {self.table_name} BATCHVALUES("]
        self.state = FrameState.IN_GROUP

    def _close_group(self) -> None:
        # _group holds the header plus one entry per row.
        rows_in_group = len(self._group) - 1
        self._write(self._group[0] + ",".join(self._group[1:]) + ");\n")
        self._group = []
        self.state = FrameState.IDLE
        log.debug(
            "Flushed batch group",
            extra={"table": self.table_name, "rows": rows_in_group},
        )

    def write_row(self, tokens: Sequence[str]) -> None:
        """Append one row, opening and flushing groups as needed."""
        if self.state is FrameState.IDLE:
            self._open_group()
        self._group.append(f"VALUES ({','.join(tokens)})")
        if len(self._group) - 1 == self.batch_size:
            self._close_group()

    def finish_rows(self) -> None:
        """Close the trailing partial group, if one is open."""
        if self.state is FrameState.IN_GROUP:
            self._close_group()

    def write_rows(self, rows: Iterable[Sequence[str]]) -> int:
        """
        Write all rows and close the final group.

        Returns the number of BATCHINSERT groups written.
        """
        groups = 0
        for tokens in rows:
            if self.state is FrameState.IDLE:
                groups += 1
            self.write_row(tokens)
        self.finish_rows()
        return groups


__all__ = ["FrameState", "ScriptWriter"]
