"""Pydantic schemas for records handed back to callers."""

from .resource import ResourcePage, ResourceRecord

__all__ = ["ResourcePage", "ResourceRecord"]
