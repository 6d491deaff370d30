"""Typed handles to components."""

from __future__ import annotations

from typing import Any, Generic, Type, TypeVar

from .guards import ComponentReadGuard, ComponentWriteGuard
from .resource import ComponentPtr, TypeMismatchError

T = TypeVar("T")


class ComponentHandle(Generic[T]):
    """A handle that reads and writes one component of a fixed type."""

    __slots__ = ("_ptr", "_type")

    def __init__(self, ptr: ComponentPtr, type_: Type[T]) -> None:
        if ptr.declared_type is not type_:
            raise TypeMismatchError(type_.__qualname__, ptr.declared_type.__qualname__)
        self._ptr = ptr
        self._type = type_

    @classmethod
    def standalone(cls, component: Any) -> "ComponentHandle[Any]":
        """Create a handle owning ``component``, outside any store."""
        return cls(ComponentPtr(component), type(component))

    @property
    def type_(self) -> Type[T]:
        """The component type this handle refers to."""
        return self._type

    def read(self) -> ComponentReadGuard:
        """Return a read guard to the component."""
        return self._ptr.read(self._type)

    def write(self) -> ComponentWriteGuard:
        """Return a write guard to the component."""
        return self._ptr.write(self._type)

    def clone(self) -> "ComponentHandle[T]":
        """Return another handle to the same component."""
        return ComponentHandle(self._ptr.clone(), self._type)

    def __repr__(self) -> str:
        return f"ComponentHandle(type={self._type.__qualname__!r})"