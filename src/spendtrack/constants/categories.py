"""
Closed set of spending categories shared by every component.

Validation, aggregation defaults, budget resolution and the CLI all read the
allow-list from a single ``CategorySet`` owned by the application context.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from ..errors import ValidationError

DEFAULT_CATEGORIES: tuple[str, ...] = ("fun", "groceries", "boucherie")


class CategorySet:
    """Ordered, immutable allow-list of category names."""

    __slots__ = ("_names",)

    def __init__(self, names: Iterable[str] = DEFAULT_CATEGORIES) -> None:
        cleaned = tuple(name.strip() for name in names)
        if not cleaned or any(not name for name in cleaned):
            raise ValueError("A category set needs at least one non-empty name.")
        self._names = tuple(dict.fromkeys(cleaned))

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __repr__(self) -> str:
        return f"CategorySet({list(self._names)!r})"

    def validate(self, name: str) -> str:
        """Return ``name`` when allowed, otherwise raise ``ValidationError``."""

        if name not in self._names:
            allowed = ", ".join(self._names)
            raise ValidationError(f"Unknown category {name!r}; expected one of: {allowed}.")
        return name

    def zeroed(self) -> dict[str, float]:
        """Return a mapping of every category to ``0.0`` in declaration order."""

        return {name: 0.0 for name in self._names}
