"""
Image orientation correction using EXIF data.
Follows Single Responsibility Principle - only handles orientation.
"""
from pathlib import Path
from typing import Optional
from PIL import Image
import logging

from ..core.interfaces import (
    IOrientationNormalizer,
    Rotation,
    Flip,
    TransformDescriptor,
    IDENTITY,
    PathLike,
)
from ..core.extensions import format_for_path
from .codec import ImageCodec
from .exif import ORIENTATION_TAG, orientation_code, resolve_orientation
from .raster import RasterImage

# Pillow names rotations counter-clockwise.
_ROTATIONS = {
    Rotation.CW_90: Image.Transpose.ROTATE_270,
    Rotation.CW_180: Image.Transpose.ROTATE_180,
    Rotation.CW_270: Image.Transpose.ROTATE_90,
}


def apply_transform(pixels: Image.Image, transform: TransformDescriptor) -> Image.Image:
    """Rotate clockwise, then flip. Pixels are moved, never resampled."""
    if transform.rotation in _ROTATIONS:
        pixels = pixels.transpose(_ROTATIONS[transform.rotation])
    if transform.flip == Flip.HORIZONTAL:
        pixels = pixels.transpose(Image.Transpose.FLIP_LEFT_RIGHT)
    return pixels


class OrientationNormalizer(IOrientationNormalizer):
    """Fixes image orientation based on EXIF metadata."""

    def __init__(self, codec: Optional[ImageCodec] = None, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.codec = codec or ImageCodec(logger=self.logger)

    def normalize(self, image: RasterImage, remove_tag: bool = True) -> TransformDescriptor:
        """
        Apply the EXIF orientation of an image to its pixels.

        The image is modified in place. The orientation tag is only removed
        when a transform was actually applied and ``remove_tag`` is set.

        Returns:
            The transform that was applied (IDENTITY if none)
        """
        raw = image.tags.get(ORIENTATION_TAG)
        if raw is None:
            return IDENTITY

        transform = resolve_orientation(orientation_code(raw))
        if transform.is_identity:
            return transform

        image.pixels = apply_transform(image.pixels, transform)
        if remove_tag:
            del image.tags[ORIENTATION_TAG]

        self.logger.debug(f"Applied {transform} ({image.width}x{image.height})")
        return transform

    def normalize_file(
        self,
        source_path: PathLike,
        target_path: PathLike,
        target_format: Optional[str] = None,
        remove_tag: bool = True
    ) -> TransformDescriptor:
        """
        Fix orientation of an image file.

        Args:
            source_path: Source image path
            target_path: Output path, written only if the pixels changed
            target_format: Output format (defaults to the target extension,
                then the source format)
            remove_tag: Drop the orientation tag from the written image

        Returns:
            The transform that was applied (IDENTITY if none)
        """
        source_path = Path(source_path)
        target_path = Path(target_path)

        image = self.codec.read(source_path)
        transform = self.normalize(image, remove_tag)
        if transform.is_identity:
            self.logger.debug(f"No orientation change for {source_path.name}")
            return transform

        target_format = target_format or format_for_path(target_path) or image.format
        self.codec.write(image, target_path, target_format)
        self.logger.info(f"Oriented {source_path.name} -> {target_path.name} ({transform})")
        return transform
