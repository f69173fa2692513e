"""
EXIF orientation decoding.
Maps the orientation tag to the rotate/flip transform that displays the image upright.
"""
from typing import Any

from ..core.interfaces import Rotation, Flip, TransformDescriptor, IDENTITY

ORIENTATION_TAG = 0x0112

_ORIENTATION_TRANSFORMS = {
    1: IDENTITY,
    2: TransformDescriptor(Rotation.NONE, Flip.HORIZONTAL),
    3: TransformDescriptor(Rotation.CW_180, Flip.NONE),
    4: TransformDescriptor(Rotation.CW_180, Flip.HORIZONTAL),
    5: TransformDescriptor(Rotation.CW_90, Flip.HORIZONTAL),
    6: TransformDescriptor(Rotation.CW_90, Flip.NONE),
    7: TransformDescriptor(Rotation.CW_270, Flip.HORIZONTAL),
    8: TransformDescriptor(Rotation.CW_270, Flip.NONE),
}

_ORIENTATIONS = {transform: code for code, transform in _ORIENTATION_TRANSFORMS.items()}


def resolve_orientation(orientation: int) -> TransformDescriptor:
    """
    Transform for an EXIF orientation code.

    Codes outside 1-8 are treated like 1: corrupt metadata should not stop
    an image from being processed.
    """
    return _ORIENTATION_TRANSFORMS.get(orientation, IDENTITY)


def orientation_for(transform: TransformDescriptor) -> int:
    """EXIF orientation code that resolves to the given transform."""
    return _ORIENTATIONS[transform]


def orientation_code(raw: Any) -> int:
    """
    Orientation code stored in a raw tag value.

    The code is the first byte of a byte sequence, the low byte of an int, or
    the first element of a sequence. Anything else yields 0.
    """
    if isinstance(raw, (bytes, bytearray)):
        return raw[0] if raw else 0
    if isinstance(raw, int):
        return raw & 0xFF
    if isinstance(raw, (tuple, list)):
        return orientation_code(raw[0]) if raw else 0
    return 0
