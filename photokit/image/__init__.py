"""
Image geometry module for photokit.
"""
from .raster import RasterImage
from .codec import ImageCodec, CodecConfig
from .exif import ORIENTATION_TAG, resolve_orientation, orientation_code, orientation_for
from .orientation import OrientationNormalizer, apply_transform
from .cropper import RectangularCropper
from .processor import ImageProcessor, ProcessorConfig

__all__ = [
    'RasterImage',
    'ImageCodec',
    'CodecConfig',
    'ORIENTATION_TAG',
    'resolve_orientation',
    'orientation_code',
    'orientation_for',
    'OrientationNormalizer',
    'apply_transform',
    'RectangularCropper',
    'ImageProcessor',
    'ProcessorConfig',
]
