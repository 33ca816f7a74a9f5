"""SQLAlchemy models for the resource registry."""

from .resource import Resource
from .sequence import IdSequence

__all__ = ["IdSequence", "Resource"]
