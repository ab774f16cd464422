"""Enum types mirroring PostgreSQL custom enums."""

from enum import Enum


class UserRole(str, Enum):
    """Marketplace role chosen at sign-up."""
    architect = "architect"
    homeowner = "homeowner"
