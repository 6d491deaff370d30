"""Reader/writer guards over shared component storage, with deadlock detection."""

from __future__ import annotations

import enum
import sys
import threading
from dataclasses import dataclass, field
from typing import Any, Optional

_ABSENT: Any = object()


class LockState(enum.IntFlag):
    """Flags describing the lifecycle of a component slot."""

    ORPHANED = 1 << 0
    """The component has been removed from its parent store."""
    IS_INIT = 1 << 1
    """The component slot holds a value."""


class DeadlockError(RuntimeError):
    """Raised when a thread asks for a lock while it holds the write lock."""


@dataclass(eq=False)
class ComponentInner:
    """The shared state behind every pointer to one component.

    ``state`` is the lock word: ``-1`` while a writer holds the lock, ``0`` when
    free, and otherwise the number of active readers.
    """

    component: Any = _ABSENT
    type_name: str = "?"
    strong: int = 1
    weak: int = 1
    state: int = 0
    flags: LockState = LockState(0)
    writer_tid: Optional[int] = None
    writer_location: Optional[str] = None
    cond: threading.Condition = field(default_factory=threading.Condition, repr=False)
    _counts: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @classmethod
    def for_value(cls, value: Any) -> "ComponentInner":
        """Create initialised state holding ``value``."""
        return cls(
            component=value,
            type_name=type(value).__qualname__,
            flags=LockState.IS_INIT,
        )

    @property
    def has_component(self) -> bool:
        return self.component is not _ABSENT

    def drop_component(self) -> None:
        """Discard the stored value, keeping the rest of the state alive."""
        self.component = _ABSENT

    def retain(self) -> None:
        """Add one strong and one weak reference."""
        with self._counts:
            self.strong += 1
            self.weak += 1

    def release(self) -> None:
        """Drop one strong reference; the value goes when none are left."""
        with self._counts:
            self.strong -= 1
            if self.strong == 0:
                self.drop_component()
                self.weak -= 1


def check_deadlock(inner: ComponentInner, lock_type: str) -> None:
    """Raise ``DeadlockError`` if the calling thread holds the write lock."""
    if inner.writer_tid == threading.get_ident():
        raise DeadlockError(
            f"Deadlock detected: thread attempted to acquire {lock_type} lock "
            f"while holding write lock: {inner.writer_location!r}"
        )


def _check_usable(inner: ComponentInner, action: str) -> None:
    if inner.flags & ~LockState.IS_INIT:
        raise RuntimeError(f"Attempted to {action} uninitialized component")


def _caller_location(depth: int) -> str:
    frame = sys._getframe(depth)
    return f"{frame.f_code.co_filename}:{frame.f_lineno}"


class ComponentReadGuard:
    """Shared read access to a component; many readers may hold it at once.

    ``ptr`` is any object exposing the component's state as ``inner``.
    """

    def __init__(self, ptr: Any) -> None:
        inner: ComponentInner = ptr.inner
        _check_usable(inner, "read")
        with inner.cond:
            first = True
            while inner.state == -1:
                if first:
                    check_deadlock(inner, "read")
                    first = False
                inner.cond.wait()
            inner.state += 1
        inner.retain()
        self._ptr = ptr
        self._inner = inner
        self._released = False

    @property
    def value(self) -> Any:
        """The guarded component."""
        if self._released:
            raise RuntimeError("Read guard already released")
        if not self._inner.has_component:
            raise RuntimeError("Component not present")
        return self._inner.component

    def release(self) -> None:
        """Give up read access; calling again does nothing."""
        if self._released:
            return
        self._released = True
        inner = self._inner
        with inner.cond:
            inner.state -= 1
            inner.release()
            inner.cond.notify_all()

    def __enter__(self) -> "ComponentReadGuard":
        return self

    def __exit__(self, *args: Any) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"ComponentReadGuard(type={self._inner.type_name!r})"


class ComponentWriteGuard:
    """Exclusive write access to a component.

    ``location`` names the acquiring call site for deadlock reports; it
    defaults to the caller's file and line.
    """

    def __init__(self, ptr: Any, location: Optional[str] = None) -> None:
        if location is None:
            location = _caller_location(2)
        inner: ComponentInner = ptr.inner
        _check_usable(inner, "write")
        with inner.cond:
            first = True
            while inner.state != 0:
                if inner.state == -1 and first:
                    check_deadlock(inner, "write")
                first = False
                inner.cond.wait()
            inner.state = -1
            inner.writer_tid = threading.get_ident()
            inner.writer_location = location
        inner.retain()
        self._ptr = ptr
        self._inner = inner
        self._released = False

    @property
    def value(self) -> Any:
        """The guarded component."""
        if self._released:
            raise RuntimeError("Write guard already released")
        if not self._inner.has_component:
            raise RuntimeError("Component not present")
        return self._inner.component

    @value.setter
    def value(self, new: Any) -> None:
        if self._released:
            raise RuntimeError("Write guard already released")
        if not self._inner.has_component:
            raise RuntimeError("Component not present")
        self._inner.component = new

    def release(self) -> None:
        """Give up write access; calling again does nothing."""
        if self._released:
            return
        self._released = True
        inner = self._inner
        with inner.cond:
            inner.writer_tid = None
            inner.writer_location = None
            inner.release()
            inner.state = 0
            inner.cond.notify_all()

    def __enter__(self) -> "ComponentWriteGuard":
        return self

    def __exit__(self, *args: Any) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"ComponentWriteGuard(type={self._inner.type_name!r})"