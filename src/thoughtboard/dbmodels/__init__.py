"""
Database models for the SQL document store.

Each collection maps onto one table; list-valued document fields are kept in
JSON columns so a row round-trips to the same document shape the in-memory
store produces.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, MetaData, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Naming convention for deterministic constraint/index names
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all database models."""

    metadata = MetaData(naming_convention=naming_convention)


class Users(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    thoughts: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    friends: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)


class Thoughts(Base):
    __tablename__ = "thoughts"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    thought_text: Mapped[str] = mapped_column(Text, nullable=False)
    username: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    reactions: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)


COLLECTION_MODELS: dict[str, type[Base]] = {
    "users": Users,
    "thoughts": Thoughts,
}
