"""
Core module - Interfaces, errors, and data types for photokit.
"""
from .interfaces import (
    # Enums
    Rotation,
    Flip,
    CropUnit,

    # Data classes
    TransformDescriptor,
    CropRegion,
    IDENTITY,

    # Abstract interfaces
    IOrientationNormalizer,
    ICropper,
    IImageProcessor,
)
from .errors import PhotoKitError, DecodeError, EncodeError, ImageIOError

__all__ = [
    # Enums
    "Rotation",
    "Flip",
    "CropUnit",

    # Data classes
    "TransformDescriptor",
    "CropRegion",
    "IDENTITY",

    # Abstract interfaces
    "IOrientationNormalizer",
    "ICropper",
    "IImageProcessor",

    # Errors
    "PhotoKitError",
    "DecodeError",
    "EncodeError",
    "ImageIOError",
]
