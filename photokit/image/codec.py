"""
Decoding and encoding of raster images.
Thin wrapper around Pillow; the container formats themselves are Pillow's.
"""
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Optional, Tuple, Union
from dataclasses import dataclass
from PIL import Image
import logging

from ..core.errors import DecodeError, EncodeError, ImageIOError
from ..core.extensions import normalize_format, format_for_path
from .exif import ORIENTATION_TAG, orientation_code
from .raster import RasterImage, DEFAULT_DPI

Image.MAX_IMAGE_PIXELS = 1_000_000_000

# Formats Pillow can embed an EXIF block into.
EXIF_FORMATS = {"JPEG", "PNG", "WEBP", "TIFF"}

Source = Union[bytes, bytearray, BinaryIO]


@dataclass
class CodecConfig:
    """Configuration for encoding."""
    jpeg_quality: int = 90
    optimize: bool = True
    progressive: bool = True
    default_format: str = "PNG"
    default_dpi: Tuple[float, float] = DEFAULT_DPI


class ImageCodec:
    """Turns byte streams into RasterImages and back."""

    def __init__(self, config: Optional[CodecConfig] = None, logger: Optional[logging.Logger] = None):
        self.config = config or CodecConfig()
        self.logger = logger or logging.getLogger(__name__)

    def decode(self, source: Source) -> RasterImage:
        """Decode an encoded image held in memory or in a binary stream."""
        stream = BytesIO(source) if isinstance(source, (bytes, bytearray)) else source
        try:
            with Image.open(stream) as img:
                img.load()
                image = RasterImage(
                    pixels=img.copy(),
                    resolution=self._resolution(img),
                    format=img.format,
                    tags=img.getexif(),
                )
        except Exception as e:
            self.logger.error(f"Error decoding image: {e}", exc_info=True)
            raise DecodeError(f"Cannot decode image: {e}") from e
        return image

    def read(self, path: Union[str, Path]) -> RasterImage:
        """Read and decode an image file."""
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            self.logger.error(f"Error reading {path}: {e}", exc_info=True)
            raise ImageIOError(f"Cannot read {path}: {e}") from e
        return self.decode(data)

    def encode(self, image: RasterImage, format: Optional[str] = None) -> bytes:
        """
        Encode an image.

        Args:
            image: Image to serialize
            format: Target container format (defaults to the image's own)

        Returns:
            The encoded bytes
        """
        target = normalize_format(format or image.format or self.config.default_format)
        buffer = BytesIO()
        try:
            pixels, options = self._save_options(image, target)
            pixels.save(buffer, format=target, **options)
        except Exception as e:
            self.logger.error(f"Error encoding image as {target}: {e}", exc_info=True)
            raise EncodeError(f"Cannot encode image as {target}: {e}") from e
        return buffer.getvalue()

    def write(self, image: RasterImage, path: Union[str, Path], format: Optional[str] = None) -> Path:
        """Encode an image and write it to path. Format defaults to the path's extension."""
        path = Path(path)
        data = self.encode(image, format or format_for_path(path))
        try:
            path.write_bytes(data)
        except OSError as e:
            self.logger.error(f"Error writing {path}: {e}", exc_info=True)
            raise ImageIOError(f"Cannot write {path}: {e}") from e
        return path

    def _resolution(self, img: Image.Image) -> Tuple[float, float]:
        dpi = img.info.get("dpi")
        if not dpi:
            return self.config.default_dpi
        try:
            x, y = (float(v) for v in dpi)
        except (TypeError, ValueError):
            return self.config.default_dpi
        if x <= 0 or y <= 0:
            return self.config.default_dpi
        return (x, y)

    def _save_options(self, image: RasterImage, target: str):
        """Pixels converted for the target format, and its save() keyword arguments."""
        pixels = image.pixels
        options = {"dpi": image.resolution}

        if target == "JPEG":
            pixels = _prepare_for_jpeg(pixels)
            options.update(
                quality=self.config.jpeg_quality,
                optimize=self.config.optimize,
                progressive=self.config.progressive,
            )

        if target in EXIF_FORMATS and len(image.tags):
            options["exif"] = _to_exif(image.tags)

        return pixels, options


def _prepare_for_jpeg(img: Image.Image) -> Image.Image:
    """Convert image to a mode the JPEG encoder accepts."""
    if img.mode in ("RGBA", "LA"):
        background = Image.new("RGB", img.size, (255, 255, 255))
        alpha = img.split()[-1]
        background.paste(img.convert("RGB"), mask=alpha)
        return background
    if img.mode not in ("RGB", "L", "CMYK"):
        return img.convert("RGB")
    return img


def _to_exif(tags) -> Image.Exif:
    if isinstance(tags, Image.Exif):
        return tags
    exif = Image.Exif()
    for tag, value in tags.items():
        if tag == ORIENTATION_TAG:
            value = orientation_code(value)
        exif[tag] = value
    return exif
