"""
Table Definitions

Deployments run one of two schema shapes:

- owner-scoped: ``app_data`` and ``user_logs`` carry a ``user_id`` column and
  ``app_data`` is unique on ``(key, user_id)``;
- unscoped: no ``user_id`` column and ``app_data`` is unique on ``key``.

Both shapes are described here as SQLAlchemy Core tables, each on its own
MetaData, so statements for either shape can be built without reflection.
The two tables are probed independently, so the store picks each one by
its own capability flag.
"""

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB

APP_DATA_TABLE = "app_data"
USER_LOGS_TABLE = "user_logs"
OWNER_COLUMN = "user_id"

# jsonb on PostgreSQL, JSON text elsewhere
JSONValueType = JSON().with_variant(JSONB(), "postgresql")

scoped_metadata = MetaData()
unscoped_metadata = MetaData()


def _app_data_table(metadata: MetaData, owner_scoped: bool) -> Table:
    columns = [
        Column("key", Text, nullable=False),
        Column("value", JSONValueType, nullable=False),
        Column(
            "updated_at",
            DateTime(timezone=True),
            server_default=func.now(),
            nullable=False,
        ),
    ]
    if owner_scoped:
        columns.append(Column(OWNER_COLUMN, String(200), nullable=False))
        unique = UniqueConstraint("key", OWNER_COLUMN, name="uq_app_data_key_user")
    else:
        unique = UniqueConstraint("key", name="uq_app_data_key")
    return Table(APP_DATA_TABLE, metadata, *columns, unique)


def _user_logs_table(metadata: MetaData, owner_scoped: bool) -> Table:
    columns = [
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("event", String(200), nullable=False),
        Column("details", JSONValueType, nullable=True),
        Column(
            "created_at",
            DateTime(timezone=True),
            server_default=func.now(),
            nullable=False,
        ),
    ]
    if owner_scoped:
        columns.append(Column(OWNER_COLUMN, String(200), nullable=True))
    return Table(USER_LOGS_TABLE, metadata, *columns)


scoped_app_data = _app_data_table(scoped_metadata, owner_scoped=True)
scoped_user_logs = _user_logs_table(scoped_metadata, owner_scoped=True)
unscoped_app_data = _app_data_table(unscoped_metadata, owner_scoped=False)
unscoped_user_logs = _user_logs_table(unscoped_metadata, owner_scoped=False)


def app_data_table(owner_scoped: bool) -> Table:
    return scoped_app_data if owner_scoped else unscoped_app_data


def user_logs_table(owner_scoped: bool) -> Table:
    return scoped_user_logs if owner_scoped else unscoped_user_logs


def schema_metadata(owner_scoped: bool) -> MetaData:
    """MetaData used by ``init_db()`` to create a fresh schema."""
    return scoped_metadata if owner_scoped else unscoped_metadata
