"""Shared mutable values with strong and weak handles."""

from __future__ import annotations

import weakref
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

_UNSET: Any = object()


class _Cell:
    """The storage slot that strong handles keep alive."""

    __slots__ = ("value", "__weakref__")

    def __init__(self, value: Any) -> None:
        self.value = value


class Shared(Generic[T]):
    """A strong handle to a value that several owners may read and replace."""

    __slots__ = ("inner",)

    def __init__(self, value: T) -> None:
        self.inner = _Cell(value)

    @classmethod
    def _from_cell(cls, cell: _Cell) -> "Shared[T]":
        obj = cls.__new__(cls)
        obj.inner = cell
        return obj

    def get(self) -> T:
        """Return the shared value."""
        return self.inner.value

    def set(self, value: T) -> None:
        """Replace the shared value for every holder."""
        self.inner.value = value

    @classmethod
    def new_cyclic(cls, factory: Callable[["WeakShared[T]"], T]) -> "Shared[T]":
        """Build a value that holds a weak handle to its own storage.

        While ``factory`` runs, upgrading the weak handle yields ``None``.
        """
        cell = _Cell(_UNSET)
        weak: WeakShared[T] = WeakShared(cell)
        cell.value = factory(weak)
        return cls._from_cell(cell)

    def downgrade(self) -> "WeakShared[T]":
        """Return a weak handle that does not keep the value alive."""
        return WeakShared(self.inner)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Shared):
            return self.get() == other.get()
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Shared({self.inner.value!r})"


class WeakShared(Generic[T]):
    """A weak handle to a ``Shared`` value."""

    __slots__ = ("_ref",)

    def __init__(self, cell: _Cell) -> None:
        self._ref = weakref.ref(cell)

    def upgrade(self) -> Optional[Shared[T]]:
        """Return a strong handle, or ``None`` if the value is gone or not yet built."""
        cell = self._ref()
        if cell is None or cell.value is _UNSET:
            return None
        return Shared._from_cell(cell)

    def __repr__(self) -> str:
        return f"WeakShared(alive={self.upgrade() is not None})"