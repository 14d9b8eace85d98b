# -*- coding: utf-8 -*-
"""Location: ./asynccss/db.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Options database.
A single key-value ``options`` table in the spirit of a CMS options store,
plus the engine and session factory built from settings.
"""

# Standard
from functools import lru_cache
from typing import Optional

# Third-Party
from sqlalchemy import create_engine, String, Text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, Session, sessionmaker

# First-Party
from asynccss.config import settings


class Base(DeclarativeBase):
    """Declarative base for the options schema."""


class Option(Base):
    """A persisted option.

    Attributes:
        name: the option key.
        value: the JSON-encoded option value.
    """

    __tablename__ = "options"

    name: Mapped[str] = mapped_column(String(191), primary_key=True)
    value: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


def build_engine(url: str) -> Engine:
    """Create an engine and make sure the schema exists.

    Args:
        url: SQLAlchemy database URL.

    Returns:
        The engine.
    """
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    engine = create_engine(url, connect_args=connect_args, future=True)
    Base.metadata.create_all(bind=engine)
    return engine


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker[Session]:
    """Get the session factory bound to the configured database.

    Returns:
        A cached sessionmaker.
    """
    return sessionmaker(autocommit=False, autoflush=False, bind=build_engine(settings.database_url))
