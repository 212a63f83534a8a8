"""Table schemas for raw SQL access.

Each :class:`TableSchema` is built once, at import time, from the declarative
tables in ``app.models``. It owns the column order used for projections, the
whitelist of updatable fields and the conversion of raw rows into keyword
arguments for the domain records in ``app.services.records``.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic.alias_generators import to_camel
from sqlalchemy import Boolean, LargeBinary, Table

from app.models import File, Post, Thread


class ConfigurationError(ValueError):
    """A caller named a field that the table does not declare."""


class _NotLoaded:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_LOADED"

    def __bool__(self) -> bool:
        return False


# Marks a record field whose column was left out of the SELECT.
NOT_LOADED = _NotLoaded()


@dataclass(frozen=True)
class FieldSpec:
    name: str
    column: str
    nullable: bool
    excludable: bool
    is_boolean: bool
    is_binary: bool

    def to_python(self, value: Any) -> Any:
        if value is None:
            return None
        if self.is_boolean:
            return bool(value)
        if self.is_binary:
            return bytes(value)
        return value


class TableSchema:
    def __init__(self, name: str, fields: Iterable[FieldSpec]):
        self.name = name
        self.fields: tuple[FieldSpec, ...] = tuple(fields)
        self._by_name = {field.name: field for field in self.fields}
        self._by_name.update({to_camel(field.name): field for field in self.fields})

    @classmethod
    def from_table(cls, table: Table) -> "TableSchema":
        return cls(
            table.name,
            (
                FieldSpec(
                    name=column.key,
                    column=column.name,
                    nullable=bool(column.nullable),
                    excludable=bool(column.info.get("excludable")),
                    is_boolean=isinstance(column.type, Boolean),
                    is_binary=isinstance(column.type, LargeBinary),
                )
                for column in table.columns
            ),
        )

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(field.column for field in self.fields)

    @property
    def excludable(self) -> tuple[str, ...]:
        return tuple(field.column for field in self.fields if field.excludable)

    def projection(self, excluded: Iterable[str] = ()) -> str:
        """Comma-joined column list without ``excluded``; unknown names are ignored."""
        skip = set(excluded)
        return ", ".join(column for column in self.columns if column not in skip)

    def field(self, name: str) -> FieldSpec:
        spec = self._by_name.get(name)
        if spec is None:
            raise ConfigurationError(f"Table {self.name} has no field named {name!r}")
        return spec

    def column_for(self, name: str) -> str:
        """Map ``isDeleted`` or ``is_deleted`` to ``is_deleted``; any other spelling raises."""
        return self.field(name).column

    def load_row(self, row: Mapping[str, Any]) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for field in self.fields:
            if field.column in row:
                values[field.name] = field.to_python(row[field.column])
            else:
                values[field.name] = NOT_LOADED
        return values

    def bind_params(self, record: Any, names: Iterable[str]) -> dict[str, Any]:
        params: dict[str, Any] = {}
        for name in names:
            field = self.field(name)
            value = getattr(record, field.name)
            if value is NOT_LOADED:
                raise ValueError(f"{self.name}.{field.column} was not loaded and cannot be written")
            params[field.column] = value
        return params


THREADS = TableSchema.from_table(Thread.__table__)
POSTS = TableSchema.from_table(Post.__table__)
FILES = TableSchema.from_table(File.__table__)

FILE_PAYLOAD_COLUMNS = FILES.excludable
