"""Decoded RGBA8 images."""

from __future__ import annotations

import io
import os
from dataclasses import dataclass, field
from typing import Tuple, Union

from PIL import Image as _PILImage
from PIL import UnidentifiedImageError


@dataclass(frozen=True)
class Image:
    """An immutable image stored as tightly packed RGBA8 pixels, row by row."""

    width: int
    height: int
    pixels: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("Image dimensions must not be negative")
        expected = self.width * self.height * 4
        if len(self.pixels) != expected:
            raise ValueError(
                f"Pixel buffer holds {len(self.pixels)} bytes, expected {expected}"
            )
        object.__setattr__(self, "pixels", bytes(self.pixels))

    @classmethod
    def _from_pil(cls, img: _PILImage.Image) -> "Image":
        rgba = img.convert("RGBA")
        return cls(rgba.width, rgba.height, rgba.tobytes())

    @classmethod
    def from_mem(cls, raw_bytes: bytes) -> "Image":
        """Decode an image held in memory; raise ``ValueError`` if it is not one."""
        try:
            with _PILImage.open(io.BytesIO(raw_bytes)) as img:
                return cls._from_pil(img)
        except (UnidentifiedImageError, OSError) as exc:
            raise ValueError(f"Could not decode image: {exc}") from exc

    @classmethod
    def from_file(cls, path: Union[str, "os.PathLike[str]"]) -> "Image":
        """Decode an image file; raise ``ValueError`` if it is not an image."""
        try:
            with _PILImage.open(path) as img:
                return cls._from_pil(img)
        except UnidentifiedImageError as exc:
            raise ValueError(f"Could not decode image {path!s}: {exc}") from exc

    def dimensions(self) -> Tuple[int, int]:
        """Return ``(width, height)``."""
        return (self.width, self.height)

    def pixel_bytes(self) -> bytes:
        """Return the raw RGBA pixel bytes."""
        return self.pixels

    def __repr__(self) -> str:
        return f"Image(dimensions={self.dimensions()})"