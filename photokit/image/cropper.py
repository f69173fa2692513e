"""
Rectangular cropping with high-quality resampling.

The source rectangle is stretched onto the whole destination buffer with
Pillow's anti-aliased bicubic filter. Source pixels outside the image are
taken from the nearest edge (clamp-to-edge).
"""
from typing import Optional, Tuple, Union
from PIL import Image
import numpy as np
import logging
import math

from ..core.interfaces import ICropper, CropRegion, CropUnit
from .codec import ImageCodec, Source
from .raster import RasterImage

RESAMPLE = Image.Resampling.BICUBIC

# Bicubic kernel radius, in source pixels, before downscale widening.
_BICUBIC_SUPPORT = 2.0

# Modes that both Pillow's resampler and numpy round-trip without loss.
_RESAMPLE_MODES = {"L", "LA", "RGB", "RGBA", "I", "I;16", "F"}

# Premultiplied alpha modes and their straight-alpha equivalents.
_UNPREMULTIPLIED = {"RGBa": "RGBA", "La": "LA"}

Box = Tuple[float, float, float, float]


class RectangularCropper(ICropper):
    """
    Extracts a sub-rectangle of an image into a buffer of the region's size.

    Example:
        cropper = RectangularCropper()
        data = cropper.crop(Path("photo.jpg").read_bytes(), CropRegion(10, 10, 200, 100))
    """

    def __init__(self, codec: Optional[ImageCodec] = None, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.codec = codec or ImageCodec(logger=self.logger)

    def crop(
        self,
        source: Union[RasterImage, Source],
        region: CropRegion,
        unit: CropUnit = CropUnit.PIXEL
    ) -> bytes:
        """
        Crop a region and encode it in the source's container format.

        Args:
            source: Decoded image, encoded bytes, or a binary stream
            region: Source rectangle, in ``unit``
            unit: Unit of the region coordinates

        Returns:
            Encoded bytes of a ceil(width) x ceil(height) image
        """
        image = source if isinstance(source, RasterImage) else self.codec.decode(source)
        cropped = self.crop_image(image, region, unit)
        return self.codec.encode(cropped, image.format)

    def crop_image(
        self,
        image: RasterImage,
        region: CropRegion,
        unit: CropUnit = CropUnit.PIXEL
    ) -> RasterImage:
        """Resample the region into a new image carrying the source resolution."""
        size = region.output_size
        box = region.to_pixels(unit, image.resolution)

        try:
            pixels = _prepare_for_resample(image.pixels)
            if _inside(box, pixels.size):
                resized = pixels.resize(size, RESAMPLE, box=box)
            else:
                resized = _resize_edge_extended(pixels, size, box)
        except Exception as e:
            self.logger.error(f"Error cropping {image.width}x{image.height} image to {region}: {e}", exc_info=True)
            raise

        self.logger.debug(f"Cropped {box} -> {size[0]}x{size[1]}")
        return RasterImage(pixels=resized, resolution=image.resolution, format=image.format)


def _prepare_for_resample(img: Image.Image) -> Image.Image:
    """Convert modes the resampler can't interpolate (palette, bilevel, ...)."""
    if img.mode in _RESAMPLE_MODES:
        return img
    if img.mode == "1":
        return img.convert("L")
    if img.mode.startswith("I;16"):
        return img.convert("I")
    if img.mode in _UNPREMULTIPLIED:
        return img.convert(_UNPREMULTIPLIED[img.mode])
    has_alpha = any(band.upper() == "A" for band in img.getbands()) or "transparency" in img.info
    return img.convert("RGBA" if has_alpha else "RGB")


def _inside(box: Box, size: Tuple[int, int]) -> bool:
    left, upper, right, lower = box
    return left >= 0 and upper >= 0 and right <= size[0] and lower <= size[1]


def _resize_edge_extended(img: Image.Image, size: Tuple[int, int], box: Box) -> Image.Image:
    """
    Resample a box that reaches outside the image.

    Builds a window covering the box plus the filter support, where every
    out-of-range row/column index is clamped to the nearest edge, then
    resamples the box within that window.
    """
    left, upper, right, lower = box
    scale = max((right - left) / size[0], (lower - upper) / size[1], 1.0)
    margin = math.ceil(_BICUBIC_SUPPORT * scale) + 1

    x0 = math.floor(left) - margin
    y0 = math.floor(upper) - margin
    cols = np.clip(np.arange(x0, math.ceil(right) + margin), 0, img.width - 1)
    rows = np.clip(np.arange(y0, math.ceil(lower) + margin), 0, img.height - 1)

    window = np.ascontiguousarray(np.asarray(img)[np.ix_(rows, cols)])
    return Image.fromarray(window).resize(
        size, RESAMPLE, box=(left - x0, upper - y0, right - x0, lower - y0)
    )
