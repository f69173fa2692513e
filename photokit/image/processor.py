"""
Image geometry operations.
Facade over orientation correction and cropping, sharing one codec and logger.
"""
from pathlib import Path
from typing import Optional, Tuple, Union
from dataclasses import dataclass, field
from PIL import Image
import logging

from ..core.interfaces import (
    IImageProcessor,
    CropRegion,
    CropUnit,
    TransformDescriptor,
    PathLike,
)
from ..core.extensions import is_image, format_for_path
from .codec import ImageCodec, CodecConfig, Source
from .cropper import RectangularCropper, RESAMPLE
from .exif import ORIENTATION_TAG, orientation_code
from .orientation import OrientationNormalizer
from .raster import RasterImage


@dataclass
class ProcessorConfig:
    """Configuration for the image processor."""
    codec: CodecConfig = field(default_factory=CodecConfig)
    thumbnail_size: Tuple[int, int] = (150, 200)


class ImageProcessor(IImageProcessor):
    """
    Crops and orients images.

    Example:
        processor = ImageProcessor()

        image = processor.codec.read(Path("photo.jpg"))
        processor.fix_orientation(image)
        data = processor.crop(image, CropRegion(0, 0, 500, 500))
    """

    def __init__(self, config: Optional[ProcessorConfig] = None, logger: Optional[logging.Logger] = None):
        self.config = config or ProcessorConfig()
        self.logger = logger or logging.getLogger(__name__)

        self.codec = ImageCodec(self.config.codec, self.logger)
        self.normalizer = OrientationNormalizer(self.codec, self.logger)
        self.cropper = RectangularCropper(self.codec, self.logger)

    def fix_orientation(self, image: RasterImage, remove_tag: bool = True) -> TransformDescriptor:
        """Fix EXIF orientation in place."""
        return self.normalizer.normalize(image, remove_tag)

    def fix_orientation_file(
        self,
        source_path: PathLike,
        target_path: PathLike,
        target_format: Optional[str] = None,
        remove_tag: bool = True
    ) -> TransformDescriptor:
        """Fix EXIF orientation of a file. The target is only written if pixels changed."""
        return self.normalizer.normalize_file(source_path, target_path, target_format, remove_tag)

    def crop(
        self,
        source: Union[RasterImage, Source],
        region: CropRegion,
        unit: CropUnit = CropUnit.PIXEL
    ) -> bytes:
        """Crop a region, encoded in the source's format."""
        return self.cropper.crop(source, region, unit)

    def crop_file(
        self,
        source_path: PathLike,
        target_path: PathLike,
        region: CropRegion,
        unit: CropUnit = CropUnit.PIXEL
    ) -> Path:
        """
        Crop an image file into target_path.

        The output format follows the target extension, falling back to the
        source format for unknown extensions.
        """
        image = self.codec.read(source_path)
        cropped = self.cropper.crop_image(image, region, unit)
        target_format = format_for_path(target_path) or image.format
        return self.codec.write(cropped, target_path, target_format)

    def thumbnail(self, image: RasterImage, size: Optional[Tuple[int, int]] = None) -> RasterImage:
        """
        Upright copy of an image drawn onto a canvas of exactly size.

        The picture is stretched to the canvas with bicubic resampling, so it
        may be upscaled and its aspect ratio is not kept. The source image is
        left untouched. The copy keeps no metadata tags other than an
        orientation tag that resolved to no transform.
        """
        upright = self._upright_copy(image)
        upright.pixels = upright.pixels.resize(size or self.config.thumbnail_size, RESAMPLE)
        return upright

    def fit_thumbnail(self, image: RasterImage, size: Optional[Tuple[int, int]] = None) -> RasterImage:
        """Like thumbnail, but scaled down to fit within size keeping the aspect ratio."""
        upright = self._upright_copy(image)
        upright.pixels = self._resize_image(upright.pixels, size or self.config.thumbnail_size)
        return upright

    def _upright_copy(self, image: RasterImage) -> RasterImage:
        upright = RasterImage(pixels=image.pixels, resolution=image.resolution, format=image.format)
        raw = image.tags.get(ORIENTATION_TAG)
        if raw is not None:
            upright.tags[ORIENTATION_TAG] = orientation_code(raw)

        self.normalizer.normalize(upright, remove_tag=True)
        return upright

    def _resize_image(self, img: Image.Image, size: Tuple[int, int]) -> Image.Image:
        """Resize image maintaining aspect ratio."""
        w, h = img.size
        max_w, max_h = size

        if w <= max_w and h <= max_h:
            return img.copy()

        scale = min(max_w / w, max_h / h)
        new_w = max(1, round(w * scale))
        new_h = max(1, round(h * scale))

        return img.resize((new_w, new_h), RESAMPLE)

    @classmethod
    def is_valid_image(cls, path: Union[str, Path]) -> bool:
        """Check if path is an existing file with a supported image extension."""
        path = Path(path)
        return path.is_file() and is_image(path)
