"""
PhotoKit - Image geometry toolkit.

Two operations over decoded raster images:
- Cropping a rectangular region with high-quality bicubic resampling
- Normalizing pixel orientation from the EXIF orientation tag

Example usage:
    from photokit import ImageProcessor, CropRegion

    processor = ImageProcessor()

    # Rotate a photo upright, writing the target only if it needed it
    transform = processor.fix_orientation_file(Path("in.jpg"), Path("out.jpg"))
    print(f"Applied {transform}")

    # Crop a region out of an encoded image
    data = processor.crop(Path("in.jpg").read_bytes(), CropRegion(10, 10, 200, 150))
"""
import logging

from .core.interfaces import (
    Rotation,
    Flip,
    TransformDescriptor,
    IDENTITY,
    CropRegion,
    CropUnit,
)
from .core.errors import PhotoKitError, DecodeError, EncodeError, ImageIOError
from .core.extensions import (
    IMAGE_EXTENSIONS,
    FORMAT_EXTENSIONS,
    is_image,
    format_for_path,
    normalize_format,
)
from .image import (
    RasterImage,
    ImageCodec,
    CodecConfig,
    ORIENTATION_TAG,
    resolve_orientation,
    orientation_code,
    orientation_for,
    OrientationNormalizer,
    apply_transform,
    RectangularCropper,
    ImageProcessor,
    ProcessorConfig,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"

__all__ = [
    # Main facade
    "ImageProcessor",
    "ProcessorConfig",

    # Core types
    "Rotation",
    "Flip",
    "TransformDescriptor",
    "IDENTITY",
    "CropRegion",
    "CropUnit",
    "RasterImage",

    # Errors
    "PhotoKitError",
    "DecodeError",
    "EncodeError",
    "ImageIOError",

    # Codec
    "ImageCodec",
    "CodecConfig",

    # Orientation
    "ORIENTATION_TAG",
    "resolve_orientation",
    "orientation_code",
    "orientation_for",
    "OrientationNormalizer",
    "apply_transform",

    # Cropping
    "RectangularCropper",

    # Extensions
    "IMAGE_EXTENSIONS",
    "FORMAT_EXTENSIONS",
    "is_image",
    "format_for_path",
    "normalize_format",
]
