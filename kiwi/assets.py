"""A named store for loaded assets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from .image import Image


@dataclass
class AssetStore:
    """Holds decoded images by name."""

    images: Dict[str, Image] = field(default_factory=dict)

    def add_image(self, name: str, data: bytes) -> Image:
        """Decode ``data`` and store it under ``name``, replacing any earlier image."""
        image = Image.from_mem(data)
        self.images[name] = image
        return image

    def get_image(self, name: str) -> Optional[Image]:
        """Return the image stored under ``name``, or ``None``."""
        return self.images.get(name)