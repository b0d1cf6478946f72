"""
SQLAlchemy Base for Database Models

Defines the declarative base that all database models inherit from, so every
table shares one metadata object for ``create_all``.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


__all__ = ["Base"]
