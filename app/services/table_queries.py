import logging
from collections.abc import Iterable, Sequence
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import Table, bindparam, text
from sqlalchemy.schema import CreateIndex, CreateTable

from app.database import QueryExecutor
from app.services.mapping import ConfigurationError, TableSchema

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")

# Ids outside the signed 64-bit range cannot be stored or bound.
MIN_ROW_ID = -(2**63)
MAX_ROW_ID = 2**63 - 1


class TableQueries(Generic[RecordT]):
    """Raw SQL CRUD shared by the table modules.

    Subclasses set ``table``, ``schema`` and ``record``. Only column names
    taken from ``schema`` are ever interpolated into SQL text; all values are
    bound parameters.
    """

    table: ClassVar[Table]
    schema: ClassVar[TableSchema]
    record: ClassVar[type]

    # Stays under SQLITE_MAX_VARIABLE_NUMBER (999) of older SQLite builds.
    in_chunk_size: ClassVar[int] = 500

    def __init__(self, db: QueryExecutor):
        self.db = db

    def create_table(self) -> None:
        self.db.execute(CreateTable(self.table, if_not_exists=True))
        for index in self.table.indexes:
            self.db.execute(CreateIndex(index, if_not_exists=True))

    def _select_sql(self, where: str, excluded: Iterable[str], suffix: str = "") -> str:
        sql = f"SELECT {self.schema.projection(excluded)} FROM {self.schema.name}"
        if where:
            sql += f" WHERE {where}"
        return f"{sql} {suffix}" if suffix else sql

    def _select_one(self, where: str, params: dict[str, Any], excluded: Iterable[str]) -> RecordT | None:
        row = self.db.fetch_one(self._select_sql(where, excluded, "ORDER BY id LIMIT 1"), params)
        return self.record.from_row(row) if row is not None else None

    def _select_all(
        self, where: str, params: dict[str, Any], excluded: Iterable[str], order_by: str = ""
    ) -> list[RecordT]:
        suffix = f"ORDER BY {order_by}" if order_by else ""
        rows = self.db.fetch_all(self._select_sql(where, excluded, suffix), params)
        return [self.record.from_row(row) for row in rows]

    def _select_in(
        self,
        column: str,
        ids: Sequence[int],
        excluded: Iterable[str],
        list_index: int | None = None,
    ) -> list[RecordT]:
        if not ids:
            return []
        where = f"{column} IN :ids"
        params: dict[str, Any] = {}
        if list_index is not None:
            where += " AND list_index = :list_index"
            params["list_index"] = list_index
        statement = text(self._select_sql(where, excluded)).bindparams(bindparam("ids", expanding=True))

        ids = list(ids)
        records = []
        for start in range(0, len(ids), self.in_chunk_size):
            params["ids"] = ids[start : start + self.in_chunk_size]
            records.extend(self.record.from_row(row) for row in self.db.fetch_all(statement, params))
        return records

    def select_by_id(self, record_id: int, excluded: Iterable[str] = ()) -> RecordT | None:
        if not MIN_ROW_ID <= record_id <= MAX_ROW_ID:
            return None
        return self._select_one("id = :id", {"id": record_id}, excluded)

    def insert(self, record: RecordT) -> int:
        """Insert every column; ``id`` is left to the engine when the record has none."""
        names = [field.name for field in self.schema.fields if not (field.name == "id" and record.id is None)]
        params = self.schema.bind_params(record, names)
        columns = ", ".join(params)
        placeholders = ", ".join(f":{column}" for column in params)
        result = self.db.run(
            f"INSERT INTO {self.schema.name} ({columns}) VALUES ({placeholders}) RETURNING id",
            params,
        )
        return result.last_id

    def update(self, record: RecordT, fields: Iterable[str]) -> int:
        """Persist only ``fields`` of ``record``; other columns are left as stored."""
        columns = [self.schema.column_for(name) for name in fields]
        if not columns:
            raise ConfigurationError(f"No fields given to update in {self.schema.name}")
        if "id" in columns:
            raise ConfigurationError(f"{self.schema.name}.id cannot be updated")
        if record.id is None:
            raise ValueError(f"Cannot update a {self.schema.name} row without an id")

        params = self.schema.bind_params(record, columns)
        assignments = ", ".join(f"{column} = :{column}" for column in params)
        params["id"] = record.id
        result = self.db.run(f"UPDATE {self.schema.name} SET {assignments} WHERE id = :id", params)
        if result.row_count == 0:
            logger.info("Update of %s id=%s matched no rows", self.schema.name, record.id)
        return result.row_count
