"""Shared constants."""

from .categories import DEFAULT_CATEGORIES, CategorySet

__all__ = ["DEFAULT_CATEGORIES", "CategorySet"]
