"""Output sinks receiving decoded pixels."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

import numpy as np

if TYPE_CHECKING:
    from PIL import Image


class ImageBuilder(ABC):
    """Receives the image size once, then pixels, then produces a result.

    ``set_size`` is called before any ``set_pixel``. Coordinates passed to
    ``set_pixel`` are always inside the image and row 0 is the top row.
    ``build`` is only called when decoding succeeded.
    """

    @abstractmethod
    def set_size(self, width: int, height: int) -> None:
        ...

    @abstractmethod
    def set_pixel(self, x: int, y: int, r: int, g: int, b: int, a: int) -> None:
        ...

    @abstractmethod
    def build(self) -> Any:
        ...


class ArrayImageBuilder(ImageBuilder):
    """Collect pixels into a ``(height, width, 4)`` RGBA ``uint8`` array.

    Pixels never written by the decoder stay transparent black.
    """

    def __init__(self) -> None:
        self.pixels: Optional[np.ndarray] = None

    def set_size(self, width: int, height: int) -> None:
        self.pixels = np.zeros((height, width, 4), dtype=np.uint8)

    def set_pixel(self, x: int, y: int, r: int, g: int, b: int, a: int) -> None:
        self.pixels[y, x] = (r, g, b, a)

    def build(self) -> np.ndarray:
        if self.pixels is None:
            raise RuntimeError("build() called before set_size()")
        return self.pixels


class PillowImageBuilder(ArrayImageBuilder):
    """Produce a :class:`PIL.Image.Image` in ``RGBA`` mode."""

    def build(self) -> Image.Image:
        from PIL import Image

        return Image.fromarray(super().build())
