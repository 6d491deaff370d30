"""Texture array collections and handles to their layers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .image import Image


@dataclass(frozen=True)
class TextureHandle:
    """A run of consecutive layers in a texture array."""

    base_layer: int
    count: int

    @classmethod
    def single(cls, layer: int) -> "TextureHandle":
        """A handle to one layer."""
        return cls(layer, 1)

    @classmethod
    def null(cls) -> "TextureHandle":
        """A handle to layer 0, where the missing texture usually lives."""
        return cls(0, 1)

    def layer(self, index: int) -> int:
        """Return the array layer for ``index``; raise ``IndexError`` if out of range."""
        if not 0 <= index < self.count:
            raise IndexError(f"Texture index {index} out of range for count {self.count}")
        return self.base_layer + index


class TextureCollection:
    """Textures of equal size packed as layers of one texture array."""

    def __init__(self, label: Optional[str], dimensions: Tuple[int, int]) -> None:
        self.label = label
        self.dimensions = (int(dimensions[0]), int(dimensions[1]))
        self._textures: Dict[str, TextureHandle] = {}
        self._layers: List[bytes] = []

    def add_texture(self, name: str, data: Image) -> TextureHandle:
        """Append one image as a layer and register it under ``name``."""
        handle = TextureHandle.single(len(self._layers))
        self._layers.append(data.pixel_bytes())
        self._textures[name] = handle
        return handle

    def add_textures(self, name: str, textures: Iterable[Image]) -> TextureHandle:
        """Append several images as consecutive layers under one ``name``."""
        base = len(self._layers)
        self._layers.extend(texture.pixel_bytes() for texture in textures)
        handle = TextureHandle(base, len(self._layers) - base)
        self._textures[name] = handle
        return handle

    def push_invalid_texture(self) -> TextureHandle:
        """Append a black and magenta checkerboard layer marking a missing texture."""
        width, height = self.dimensions
        bottom = np.arange(height)[:, None] >= height // 2
        right = np.arange(width)[None, :] >= width // 2
        magenta = bottom ^ right
        pixels = np.zeros((height, width, 4), dtype=np.uint8)
        pixels[..., 3] = 255
        pixels[magenta, 0] = 255
        pixels[magenta, 2] = 255
        self._layers.append(pixels.tobytes())
        return TextureHandle.single(len(self._layers) - 1)

    def get_texture(self, name: str) -> Optional[TextureHandle]:
        """Return the handle registered under ``name``, or ``None``."""
        return self._textures.get(name)

    def layers(self) -> Tuple[bytes, ...]:
        """Return the RGBA pixel bytes of every layer, in layer order."""
        return tuple(self._layers)

    def __len__(self) -> int:
        return len(self._layers)

    def __repr__(self) -> str:
        return (
            f"TextureCollection(label={self.label!r}, dimensions={self.dimensions}, "
            f"layers={len(self._layers)})"
        )