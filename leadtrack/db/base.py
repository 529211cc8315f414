"""Declarative base for lead tracker SQLAlchemy models."""

from sqlalchemy.orm import DeclarativeBase


class BaseEntity(DeclarativeBase):
    """Base class for all lead tracker database entities."""
