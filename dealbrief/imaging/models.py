import io
from dataclasses import dataclass

import numpy as np
from PIL import Image


@dataclass
class PageImage:
    """RGBA raster buffer for one rendered page or one uploaded photo.

    ``pixels`` has shape ``(height, width, 4)`` and dtype ``uint8``.
    """

    width: int
    height: int
    pixels: np.ndarray

    @classmethod
    def from_pil(cls, image: Image.Image) -> "PageImage":
        rgba = image.convert("RGBA")
        pixels = np.array(rgba, dtype=np.uint8)
        return cls(width=rgba.width, height=rgba.height, pixels=pixels)

    @classmethod
    def from_bytes(cls, data: bytes) -> "PageImage":
        """Decode any Pillow-readable raster at its native resolution."""
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            return cls.from_pil(image)

    def to_pil(self) -> Image.Image:
        return Image.fromarray(self.pixels)

    def to_png_bytes(self) -> bytes:
        buf = io.BytesIO()
        self.to_pil().save(buf, format="PNG")
        return buf.getvalue()
