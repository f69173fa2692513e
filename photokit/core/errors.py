"""
Exception hierarchy for photokit.
"""


class PhotoKitError(Exception):
    """Base class for all photokit errors."""


class DecodeError(PhotoKitError):
    """Input stream is malformed or in an unsupported format."""


class EncodeError(PhotoKitError):
    """Image could not be serialized to the requested format."""


class ImageIOError(PhotoKitError, OSError):
    """Reading or writing an image file failed."""
