"""
DB types that work on both SQLite (local runs, tests) and PostgreSQL.
Ids are UUIDs stored as 36-char strings; API path params arrive as strings and are coerced here.
"""
import uuid
from sqlalchemy import String, TypeDecorator


def coerce_uuid(value) -> uuid.UUID:
    """Parse a UUID or its string form. Raises ValueError for anything else."""
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


class UuidType(TypeDecorator):
    """UUID that stores as string(36) so it works on SQLite and PostgreSQL."""
    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(coerce_uuid(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return coerce_uuid(value)
