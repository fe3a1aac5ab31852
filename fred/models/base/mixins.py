from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import declared_attr, relationship
from sqlalchemy.sql import func


class TimestampMixin:
    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        onupdate=func.now()
    )


class AuditMixin:
    """Who created / last touched the row; users are eager-joined for display."""

    @declared_attr
    def created_by_id(cls):
        return Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    @declared_attr
    def updated_by_id(cls):
        return Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    @declared_attr
    def created_by(cls):
        return relationship("User", foreign_keys=[cls.created_by_id], lazy="joined")

    @declared_attr
    def updated_by(cls):
        return relationship("User", foreign_keys=[cls.updated_by_id], lazy="joined")

    @property
    def created_by_username(self):
        return self.created_by.username if self.created_by else None

    @property
    def updated_by_username(self):
        return self.updated_by.username if self.updated_by else None


class VersionMixin:
    # optimistic lock counter; every accepted write bumps it
    version = Column(Integer, nullable=False, default=1)

    def touch(self, user) -> None:
        self.version = (self.version or 0) + 1
        self.updated_by_id = user.id
