"""Reference-counted component slots with strong and weak pointers."""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, Optional, Type

from .guards import ComponentInner, ComponentReadGuard, ComponentWriteGuard, LockState

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


def _in_package(filename: str) -> bool:
    return os.path.dirname(os.path.abspath(filename)) == _PACKAGE_DIR


def _caller_location() -> str:
    """File and line of the nearest caller outside this package."""
    frame = sys._getframe(1)
    while frame is not None and _in_package(frame.f_code.co_filename):
        frame = frame.f_back
    if frame is None:
        return "<unknown>"
    return f"{frame.f_code.co_filename}:{frame.f_lineno}"


def _counts_lock(inner: ComponentInner) -> threading.Lock:
    # The same lock ComponentInner uses for its own retain/release.
    return inner._counts


class TypeMismatchError(TypeError):
    """A component was requested as a type other than the one it holds."""

    def __init__(self, expected: str, found: str) -> None:
        super().__init__(f"Type mismatch: expected {expected}, found {found}")
        self.expected = expected
        self.found = found


class UninitializedComponentError(RuntimeError):
    """A component slot was used before a value was placed in it."""


class ComponentPtr:
    """A strong pointer to a component slot.

    Every pointer holds one strong reference, given up by ``release``. The
    value is discarded once the last strong reference is released; weak
    pointers keep the slot itself alive.
    """

    __slots__ = ("inner", "_type")

    def __init__(self, component: Any) -> None:
        self.inner = ComponentInner.for_value(component)
        self._type: type = type(component)

    @classmethod
    def _adopt(cls, inner: ComponentInner, type_: type) -> "ComponentPtr":
        obj = cls.__new__(cls)
        obj.inner = inner
        obj._type = type_
        return obj

    @classmethod
    def uninitialized(cls, type_: Type[Any]) -> "ComponentPtr":
        """Create an empty slot that will later hold a value of ``type_``."""
        return cls._adopt(ComponentInner(type_name=type_.__qualname__), type_)

    @property
    def declared_type(self) -> type:
        """The type this slot holds, or will hold once initialised."""
        return self._type

    def clone(self) -> "ComponentPtr":
        """Return another strong pointer to the same slot."""
        with _counts_lock(self.inner):
            self.inner.strong += 1
        return self._adopt(self.inner, self._type)

    def is_orphaned(self) -> bool:
        """Whether the component has been removed from its parent store."""
        return bool(self.inner.flags & LockState.ORPHANED)

    def orphan(self) -> None:
        """Mark the component as removed from its parent store."""
        with self.inner.cond:
            self.inner.flags |= LockState.ORPHANED

    def downgrade(self) -> "WeakComponentPtr":
        """Turn this pointer into a weak one; this pointer is released."""
        with _counts_lock(self.inner):
            self.inner.weak += 1
        weak = WeakComponentPtr(self.inner, self._type)
        self.release()
        return weak

    def _check_type(self, type_: Type[Any]) -> None:
        if type(self.inner.component) is not type_:
            raise TypeMismatchError(type_.__qualname__, self.inner.type_name)

    def try_read(self, type_: Type[Any]) -> Optional[ComponentReadGuard]:
        """Return a read guard, or ``None`` if the slot is still empty."""
        if not self.inner.has_component:
            return None
        self._check_type(type_)
        return ComponentReadGuard(self)

    def read(self, type_: Type[Any]) -> ComponentReadGuard:
        """Return a read guard; raise if the slot is empty."""
        guard = self.try_read(type_)
        if guard is None:
            raise UninitializedComponentError("Component not initialized")
        return guard

    def _try_write(self, type_: Type[Any], location: str) -> Optional[ComponentWriteGuard]:
        if not self.inner.has_component:
            return None
        self._check_type(type_)
        return ComponentWriteGuard(self, location)

    def try_write(self, type_: Type[Any]) -> Optional[ComponentWriteGuard]:
        """Return a write guard, or ``None`` if the slot is still empty."""
        return self._try_write(type_, _caller_location())

    def write(self, type_: Type[Any]) -> ComponentWriteGuard:
        """Return a write guard; raise if the slot is empty."""
        guard = self._try_write(type_, _caller_location())
        if guard is None:
            raise UninitializedComponentError("Component not initialized")
        return guard

    def is_type(self, type_: Type[Any]) -> bool:
        """Whether the held value is exactly of ``type_``."""
        if not self.inner.has_component:
            raise UninitializedComponentError("Component not present")
        return type(self.inner.component) is type_

    def initialize(self, component: Any) -> bool:
        """Fill an empty slot; return ``False`` if it already held a value."""
        if type(component) is not self._type:
            raise TypeMismatchError(self._type.__qualname__, type(component).__qualname__)
        inner = self.inner
        with inner.cond:
            if inner.flags & LockState.IS_INIT:
                return False
            inner.flags |= LockState.IS_INIT
            inner.component = component
        return True

    def retain(self) -> None:
        """Take an extra strong reference, to be given up by ``release``."""
        self.inner.retain()

    def release(self) -> None:
        """Give up one strong reference."""
        self.inner.release()

    def __enter__(self) -> "ComponentPtr":
        return self

    def __exit__(self, *args: Any) -> None:
        self.release()

    def __repr__(self) -> str:
        return (
            f"ComponentPtr(type={self.inner.type_name!r}, "
            f"strong={self.inner.strong}, weak={self.inner.weak})"
        )


class WeakComponentPtr:
    """A pointer that keeps the slot, but not its value, alive."""

    __slots__ = ("inner", "_type")

    def __init__(self, inner: ComponentInner, type_: type) -> None:
        self.inner = inner
        self._type = type_

    def upgrade(self) -> Optional[ComponentPtr]:
        """Return a strong pointer, or ``None`` if the value is gone."""
        with _counts_lock(self.inner):
            if self.inner.strong == 0:
                return None
            self.inner.strong += 1
        return ComponentPtr._adopt(self.inner, self._type)

    def release(self) -> None:
        """Give up this weak reference."""
        with _counts_lock(self.inner):
            self.inner.weak -= 1

    def __repr__(self) -> str:
        return f"WeakComponentPtr(type={self.inner.type_name!r}, strong={self.inner.strong})"