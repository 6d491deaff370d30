"""Render pipelines, per-frame data and the controller that orders them."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Any, Dict, Hashable, Iterable, List, Optional, Tuple, Type, TypeVar

from .typemap import TypeMap

T = TypeVar("T")
P = TypeVar("P", bound="RenderPipeline")


class IncorrectPipelineType(TypeError):
    """A pipeline is not of the expected type."""

    def __init__(self, message: str = "Pipeline is not of the expected type") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class DeltaTime:
    """Frame time delta in seconds; stashed every frame."""

    value: float


@dataclass(frozen=True)
class FrameCount:
    """Number of frames updated so far; stashed every frame."""

    value: int


@dataclass(frozen=True)
class ClearColor:
    """Clear colour pipelines may stash for the render pass."""

    r: float
    g: float
    b: float
    a: float


@dataclass(frozen=True)
class SetRenderTarget:
    """Update request: other pipelines render to ``view``; the requester gets the output."""

    view: Any


class Stash:
    """Per-frame data, one value per type."""

    def __init__(self) -> None:
        self._inner = TypeMap()

    def stash(self, data: Any) -> None:
        """Store ``data``, replacing any value of the same type."""
        self._inner.insert(data)

    def retrieve_checked(self, type_: Type[T]) -> Optional[T]:
        """Return the stashed value of ``type_``, or ``None``."""
        return self._inner.get(type_)

    def retrieve(self, type_: Type[T]) -> T:
        """Return the stashed value of ``type_``; raise ``KeyError`` if absent."""
        value = self.retrieve_checked(type_)
        if value is None:
            raise KeyError("Requested stashed data not found")
        return value

    def clear(self) -> None:
        """Remove all stashed data."""
        self._inner.clear()

    def __contains__(self, type_: object) -> bool:
        return type_ in self._inner

    def __repr__(self) -> str:
        return f"Stash({self._inner!r})"


class RenderPipeline(abc.ABC):
    """One stage of rendering, updated and rendered by a ``RenderController``."""

    @abc.abstractmethod
    def label(self) -> Optional[str]:
        """The pipeline's name."""

    @abc.abstractmethod
    def update(self, stash: Stash) -> Optional[SetRenderTarget]:
        """Update state for this frame; may return a request to the controller."""

    @abc.abstractmethod
    def render(self, controller: "RenderController", encoder: Any, target: Any) -> None:
        """Record rendering commands into ``encoder`` targeting ``target``."""


class RenderController:
    """Holds pipelines by key and updates and renders them in a set order.

    Nothing is rendered until ``set_render_order`` has been called.
    """

    def __init__(self) -> None:
        self._pipelines: Dict[Hashable, RenderPipeline] = {}
        self._render_list: List[Hashable] = []
        self._render_surface: Optional[Tuple[Hashable, Any]] = None
        self._frame_data = Stash()
        self._frame_count = 0

    @property
    def frame_count(self) -> int:
        return self._frame_count

    def add_pipeline(self, key: Hashable, pipeline: RenderPipeline) -> None:
        """Add ``pipeline`` under ``key``, replacing any pipeline there."""
        self._pipelines[key] = pipeline

    def get_pipeline(self, key: Hashable) -> Optional[RenderPipeline]:
        """Return the pipeline under ``key``, or ``None``."""
        return self._pipelines.get(key)

    def set_render_order(self, order: Iterable[Hashable]) -> None:
        """Set the keys to update and render, in order."""
        self._render_list = list(order)

    def _require(self, key: Hashable) -> RenderPipeline:
        pipeline = self._pipelines.get(key)
        if pipeline is None:
            raise KeyError(f"Pipeline {key!r} not found in controller")
        return pipeline

    def update_pipelines(self, delta_time: float) -> None:
        """Start a new frame: fresh stash with timing data, then update each pipeline."""
        stash = Stash()
        stash.stash(DeltaTime(delta_time))
        self._frame_count += 1
        stash.stash(FrameCount(self._frame_count))
        for key in list(self._render_list):
            request = self._require(key).update(stash)
            if isinstance(request, SetRenderTarget):
                self._render_surface = (key, request.view)
        self._frame_data = stash

    def render_pipelines(self, encoder: Any, output: Any) -> None:
        """Render every pipeline in order into ``output``.

        If a pipeline asked for a render target, every other pipeline renders
        into that target and the requester renders into ``output``.
        """
        if self._render_surface is not None:
            source, target = self._render_surface
            for key in self._render_list:
                pipeline = self._require(key)
                pipeline.render(self, encoder, output if key == source else target)
            return
        for key in self._render_list:
            self._require(key).render(self, encoder, output)

    def pipeline(self, key: Hashable, type_: Type[P]) -> P:
        """Return the pipeline under ``key`` as ``type_``.

        Raises ``KeyError`` if absent and ``IncorrectPipelineType`` if of another type.
        """
        found = downcast_pipeline(self, key, type_)
        if found is None:
            raise KeyError(f"pipeline {key!r} does not exist")
        return found

    def stash(self, data: Any) -> None:
        """Stash data for this frame; replaced at the next ``update_pipelines``."""
        self._frame_data.stash(data)

    def retrieve_checked(self, type_: Type[T]) -> Optional[T]:
        """Return this frame's data of ``type_``, or ``None``."""
        return self._frame_data.retrieve_checked(type_)

    def retrieve(self, type_: Type[T]) -> T:
        """Return this frame's data of ``type_``; raise ``KeyError`` if absent."""
        value = self.retrieve_checked(type_)
        if value is None:
            raise KeyError("Requested frame data not found")
        return value

    def __repr__(self) -> str:
        labels = [(key, p.label() or "?") for key, p in self._pipelines.items()]
        return f"RenderController(pipelines={labels!r})"


def downcast_pipeline(controller: RenderController, key: Hashable, type_: Type[P]) -> Optional[P]:
    """Return the pipeline under ``key`` as ``type_``, or ``None`` if absent.

    Raises ``IncorrectPipelineType`` if the pipeline is of another type.
    """
    pipeline = controller.get_pipeline(key)
    if pipeline is None:
        return None
    if not isinstance(pipeline, type_):
        raise IncorrectPipelineType()
    return pipeline