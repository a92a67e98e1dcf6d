"""SQLAlchemy models for packet storage."""

from uuid import UUID

try:
    from sqlalchemy import Column, Integer, String, DateTime, LargeBinary
    from sqlalchemy.dialects.postgresql import UUID as PostgresUUID
    from sqlalchemy.orm import declarative_base
    from sqlalchemy.sql import func
    from sqlalchemy.types import TypeDecorator, CHAR
except ImportError as e:
    raise ImportError(
        "SQLAlchemy is required for the SQL packet store. Install with: pip install redpacket[sql]"
    ) from e


class GUID(TypeDecorator):
    """Platform-independent GUID type.

    Uses PostgreSQL's UUID type when available, otherwise uses CHAR(36).
    """
    impl = CHAR
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(PostgresUUID())
        return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, UUID):
            return value
        return UUID(value)


Base = declarative_base()


class SqlPacket(Base):
    """SQLAlchemy model for packets. The packet itself is stored serialized in
    packet_data; version is the conditional update token."""

    __tablename__ = 'redpacket_packets'

    id = Column(GUID(), primary_key=True)
    creator_id = Column(String(255), nullable=False, index=True)
    version = Column(Integer, nullable=False, default=0)
    packet_data = Column(LargeBinary, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now())

    def __repr__(self):
        return f"<SqlPacket(id={self.id}, version={self.version})>"
