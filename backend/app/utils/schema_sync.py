"""Runtime schema catch-up for databases created by an older release."""

from __future__ import annotations

import logging

from sqlalchemy import Column, Table, inspect, literal, text
from sqlalchemy.engine import Engine
from sqlalchemy.schema import CreateColumn, CreateIndex, MetaData

logger = logging.getLogger(__name__)

_LITERAL_DEFAULT_TYPES = (bool, int, float, str)


def _addable_column(column: Column, engine: Engine) -> Column:
    """Column definition that ``ALTER TABLE ... ADD COLUMN`` accepts on a populated table.

    A NOT NULL column needs a server-side default for the existing rows. A plain
    scalar Python default is promoted to one; anything else is added as nullable.
    """
    nullable = column.nullable
    server_default = column.server_default
    if not nullable and server_default is None:
        default = column.default
        if default is not None and default.is_scalar and isinstance(default.arg, _LITERAL_DEFAULT_TYPES):
            rendered = literal(default.arg, column.type).compile(
                dialect=engine.dialect, compile_kwargs={"literal_binds": True}
            )
            server_default = text(str(rendered))
        else:
            nullable = True

    copy = Column(column.name, column.type, nullable=nullable, server_default=server_default)
    Table(column.table.name, MetaData(), copy)
    return copy


def sync_missing_schema_objects(engine: Engine, metadata: MetaData) -> list[str]:
    """Add model columns and indexes missing from existing tables.

    Tables that do not exist yet are left to ``metadata.create_all``. Returns a
    list of ``table.column`` / ``table:index`` names that were created.
    """
    inspector = inspect(engine)
    existing_tables = set(inspector.get_table_names())
    preparer = engine.dialect.identifier_preparer
    added: list[str] = []

    with engine.begin() as conn:
        for table in metadata.sorted_tables:
            if table.name not in existing_tables:
                continue

            known_columns = {col["name"] for col in inspector.get_columns(table.name)}
            for column in table.columns:
                if column.name in known_columns:
                    continue
                ddl = str(CreateColumn(_addable_column(column, engine)).compile(dialect=engine.dialect)).strip()
                conn.execute(text(f"ALTER TABLE {preparer.format_table(table)} ADD COLUMN {ddl}"))
                added.append(f"{table.name}.{column.name}")

            known_indexes = {idx.get("name") for idx in inspector.get_indexes(table.name)}
            for index in table.indexes:
                if index.name and index.name not in known_indexes:
                    conn.execute(CreateIndex(index))
                    added.append(f"{table.name}:{index.name}")

    for name in added:
        logger.info("[schema] added %s", name)
    return added
