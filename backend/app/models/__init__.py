"""
SQLModel models for the Savings Circle service.

This module exports all database models so they are registered with
SQLModel metadata before tables are created.
"""

from .group import GroupCreation

__all__ = [
    "GroupCreation",
]
