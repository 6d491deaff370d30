"""A callback proxy whose targets unregister themselves when dropped."""

from __future__ import annotations

import logging
import weakref
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)


class TargetHandle:
    """Owns a registered callback; the target lives as long as this handle."""

    __slots__ = ("_callback", "label", "__weakref__")

    def __init__(self, callback: Callable[..., Any], label: Optional[str] = None) -> None:
        self._callback = callback
        self.label = label

    def __call__(self, *args: Any) -> Any:
        return self._callback(*args)

    def __repr__(self) -> str:
        return f"TargetHandle(label={self.label!r})"


@dataclass(eq=False)
class _Target:
    label: Optional[str]
    ref: "weakref.ref[TargetHandle]"


class Proxy:
    """Dispatches calls to every live registered target, in registration order."""

    def __init__(self) -> None:
        self._targets: List[_Target] = []
        self._suspended = False

    def add_target(self, callback: Callable[..., Any], label: Optional[str] = None) -> TargetHandle:
        """Register ``callback`` and return the handle that keeps it registered."""
        handle = TargetHandle(callback, label)
        self._targets.append(_Target(label, weakref.ref(handle)))
        return handle

    def invoke(self, *args: Any) -> None:
        """Call every live target with ``args``; drop targets whose handle is gone."""
        if self._suspended:
            return
        dead = set()
        for target in list(self._targets):
            handle = target.ref()
            if handle is None:
                logger.info(
                    "Removing dead callback target: %s",
                    target.label if target.label is not None else "unknown",
                )
                dead.add(id(target))
            else:
                handle(*args)
        if dead:
            self._targets = [t for t in self._targets if id(t) not in dead]

    def suspend(self) -> None:
        """Stop dispatching until ``unsuspend`` is called."""
        self._suspended = True

    def unsuspend(self) -> None:
        self._suspended = False

    @property
    def suspended(self) -> bool:
        return self._suspended

    def __len__(self) -> int:
        return len(self._targets)

    def __repr__(self) -> str:
        return f"Proxy(targets_count={len(self._targets)})"