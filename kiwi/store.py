"""A store holding one component per type."""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional, Type, TypeVar

from .guards import ComponentReadGuard, ComponentWriteGuard
from .handles import ComponentHandle
from .resource import ComponentPtr

T = TypeVar("T")


class ComponentStore:
    """Holds at most one component of each type.

    Components are inserted during initialisation; ``finish_initialization``
    freezes the set of components, after which they can still be read and
    written but not added.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._pending: Dict[type, ComponentPtr] = {}
        self._finalized: Optional[Dict[type, ComponentPtr]] = None

    @property
    def finalized(self) -> bool:
        return self._finalized is not None

    def finish_initialization(self) -> None:
        """Freeze the set of components."""
        with self._lock:
            if self._finalized is not None:
                raise RuntimeError("ComponentStore.finish_initialization called multiple times")
            self._finalized = dict(self._pending)

    def insert(self, component: Any) -> ComponentHandle[Any]:
        """Add ``component`` and return a handle to it.

        Fills a slot reserved earlier by ``handle_for``.
        """
        type_ = type(component)
        with self._lock:
            if self._finalized is not None:
                raise RuntimeError("Cannot insert component into finalized ComponentStore")
            ptr = self._pending.get(type_)
            if ptr is None:
                self._pending[type_] = ComponentPtr(component)
            elif not ptr.initialize(component):
                raise ValueError(f"Component of type {type_.__qualname__} already exists in store")
        return self.handle_for(type_)

    def _lookup(self, type_: type) -> Optional[ComponentPtr]:
        if self._finalized is not None:
            ptr = self._finalized.get(type_)
            if ptr is not None:
                return ptr
        with self._lock:
            return self._pending.get(type_)

    def handle_for(self, type_: Type[T]) -> ComponentHandle[T]:
        """Return a handle for ``type_``.

        Before finalisation a handle may be taken for a component not yet
        inserted; using it before the insert raises.
        """
        with self._lock:
            ptr = self._lookup(type_)
            if ptr is not None:
                return ComponentHandle(ptr.clone(), type_)
            if self._finalized is not None:
                raise KeyError(f"Component of type {type_.__qualname__} does not exist in store")
            ptr = ComponentPtr.uninitialized(type_)
            self._pending[type_] = ptr
            return ComponentHandle(ptr.clone(), type_)

    def get_checked(self, type_: Type[T]) -> Optional[ComponentReadGuard]:
        """Return a read guard for ``type_``, or ``None`` if absent."""
        ptr = self._lookup(type_)
        return None if ptr is None else ptr.read(type_)

    def get(self, type_: Type[T]) -> ComponentReadGuard:
        """Return a read guard for ``type_``; raise ``KeyError`` if absent."""
        guard = self.get_checked(type_)
        if guard is None:
            raise KeyError(f"Component {type_.__qualname__} not found in store")
        return guard

    def get_mut_checked(self, type_: Type[T]) -> Optional[ComponentWriteGuard]:
        """Return a write guard for ``type_``, or ``None`` if absent."""
        ptr = self._lookup(type_)
        return None if ptr is None else ptr.write(type_)

    def get_mut(self, type_: Type[T]) -> ComponentWriteGuard:
        """Return a write guard for ``type_``; raise ``KeyError`` if absent."""
        guard = self.get_mut_checked(type_)
        if guard is None:
            raise KeyError(f"Component {type_.__qualname__} not found in store")
        return guard

    def __contains__(self, type_: object) -> bool:
        return isinstance(type_, type) and self._lookup(type_) is not None

    def __repr__(self) -> str:
        with self._lock:
            source = self._finalized if self._finalized is not None else self._pending
            components = list(source.values())
        return f"ComponentStore(finalized={self.finalized}, components={components!r})"