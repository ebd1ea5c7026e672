"""
Base Classes
------------

Foundational ORM classes for the hos database.

Classes:
    - Base: Declarative base for all SQLAlchemy models
"""
# --- Third party ---
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Serves as the declarative base for SQLAlchemy models and provides
    access to the metadata object for table creation and migrations.
    """

    pass
