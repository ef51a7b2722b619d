"""SQLAlchemy ORM models for TirTimer."""

from sqlalchemy import Column, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class Preference(Base):
    """One stored value, grouped by namespace (one group per store)."""

    __tablename__ = "preferences"
    __table_args__ = (
        UniqueConstraint("namespace", "key", name="uq_preferences_namespace_key"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    namespace = Column(String(64), nullable=False)   # timer_presets | timer_preferences
    key = Column(String(128), nullable=False)
    value = Column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Preference {self.namespace}/{self.key}={self.value!r}>"
