"""Maps that hold at most one value per concrete type."""

from __future__ import annotations

from typing import Any, Dict, Iterator, Optional, Type, TypeVar

T = TypeVar("T")


def _describe(types: Iterator[type]) -> str:
    return ", ".join(f"<{t.__qualname__}>" for t in types)


class TypeMap:
    """A map from a value's exact type to the value."""

    def __init__(self) -> None:
        self._map: Dict[type, Any] = {}

    def insert(self, resource: Any) -> None:
        """Store ``resource``, replacing any value of the same type."""
        self._map[type(resource)] = resource

    def get(self, type_: Type[T]) -> Optional[T]:
        """Return the value stored for ``type_``, or ``None``."""
        return self._map.get(type_)

    def remove(self, type_: Type[T]) -> Optional[T]:
        """Remove and return the value stored for ``type_``, or ``None``."""
        return self._map.pop(type_, None)

    def clear(self) -> None:
        """Remove every value."""
        self._map.clear()

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, type_: object) -> bool:
        return type_ in self._map

    def __repr__(self) -> str:
        return f"TypeMap({{{_describe(iter(self._map))}}})"


class ImmutableTypeMap:
    """A type map whose values are handed out as shared references."""

    def __init__(self) -> None:
        self._map: Dict[type, Any] = {}

    def insert(self, resource: Any) -> None:
        """Store ``resource``, replacing any value of the same type."""
        self._map[type(resource)] = resource

    def get(self, type_: Type[T]) -> Optional[T]:
        """Return the value stored for ``type_``, or ``None``."""
        return self._map.get(type_)

    def remove(self, type_: Type[T]) -> Optional[T]:
        """Remove and return the value stored for ``type_``, or ``None``."""
        return self._map.pop(type_, None)

    def keys(self) -> Iterator[type]:
        """Iterate over the stored types."""
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, type_: object) -> bool:
        return type_ in self._map

    def __repr__(self) -> str:
        return f"ImmutableTypeMap({{{_describe(iter(self._map))}}})"