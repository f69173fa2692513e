"""
In-memory decoded raster image.
"""
from dataclasses import dataclass, field
from typing import Any, MutableMapping, Optional, Tuple
from PIL import Image

DEFAULT_DPI = (96.0, 96.0)


@dataclass
class RasterImage:
    """
    Pixel buffer plus the metadata that travels with it.

    Width and height are read from the buffer, so they can never disagree
    with it. ``tags`` maps metadata tag ids to their raw values; decoded
    images carry Pillow's ``Image.Exif`` mapping here.
    """
    pixels: Image.Image
    resolution: Tuple[float, float] = DEFAULT_DPI
    format: Optional[str] = None
    tags: MutableMapping[int, Any] = field(default_factory=Image.Exif)

    @property
    def width(self) -> int:
        return self.pixels.width

    @property
    def height(self) -> int:
        return self.pixels.height

    @property
    def size(self) -> Tuple[int, int]:
        return self.pixels.size

    @property
    def mode(self) -> str:
        return self.pixels.mode
