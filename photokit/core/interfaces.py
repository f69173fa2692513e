"""
Abstract interfaces following Interface Segregation Principle (SOLID).
Defines the geometry types and contracts for all photokit components.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Tuple, Union
from dataclasses import dataclass
from enum import Enum
import math


class Rotation(int, Enum):
    """Clockwise rotation angles."""
    NONE = 0
    CW_90 = 90
    CW_180 = 180
    CW_270 = 270


class Flip(Enum):
    """Mirroring applied after rotation."""
    NONE = "none"
    HORIZONTAL = "horizontal"


@dataclass(frozen=True)
class TransformDescriptor:
    """
    A lossless rotate/flip remapping of a raster image.

    Rotation is applied first (clockwise), then the optional horizontal flip.
    """
    rotation: Rotation = Rotation.NONE
    flip: Flip = Flip.NONE

    @property
    def is_identity(self) -> bool:
        return self.rotation == Rotation.NONE and self.flip == Flip.NONE

    @property
    def swaps_dimensions(self) -> bool:
        return self.rotation in (Rotation.CW_90, Rotation.CW_270)

    def __str__(self) -> str:
        rotate = str(self.rotation.value) if self.rotation != Rotation.NONE else "None"
        flip = "X" if self.flip == Flip.HORIZONTAL else "None"
        return f"Rotate{rotate}Flip{flip}"


IDENTITY = TransformDescriptor()


class CropUnit(Enum):
    """Units a crop region can be expressed in."""
    PIXEL = "pixel"
    POINT = "point"
    INCH = "inch"
    MILLIMETER = "millimeter"
    DOCUMENT = "document"

    @property
    def units_per_inch(self) -> Optional[float]:
        return _UNITS_PER_INCH.get(self)

    def to_pixels(self, value: float, dpi: float) -> float:
        """Convert a coordinate in this unit to source pixels at the given DPI."""
        if self == CropUnit.PIXEL:
            return value
        return value * dpi / self.units_per_inch


_UNITS_PER_INCH = {
    CropUnit.POINT: 72.0,
    CropUnit.INCH: 1.0,
    CropUnit.MILLIMETER: 25.4,
    CropUnit.DOCUMENT: 300.0,
}


@dataclass(frozen=True)
class CropRegion:
    """Axis-aligned source rectangle, in the caller's unit."""
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        values = (self.x, self.y, self.width, self.height)
        if not all(math.isfinite(v) for v in values):
            raise ValueError(f"Crop region must be finite: {values}")
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Crop origin must be non-negative: ({self.x}, {self.y})")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Crop size must be positive: {self.width}x{self.height}")

    @property
    def output_size(self) -> Tuple[int, int]:
        """Destination buffer size: each axis rounded up."""
        return (math.ceil(self.width), math.ceil(self.height))

    @property
    def box(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    def to_pixels(self, unit: CropUnit, dpi: Tuple[float, float]) -> Tuple[float, float, float, float]:
        """Source box (left, upper, right, lower) in pixels."""
        left, upper, right, lower = self.box
        return (
            unit.to_pixels(left, dpi[0]),
            unit.to_pixels(upper, dpi[1]),
            unit.to_pixels(right, dpi[0]),
            unit.to_pixels(lower, dpi[1]),
        )


PathLike = Union[str, Path]


class IOrientationNormalizer(ABC):
    """Interface for EXIF orientation correction."""

    @abstractmethod
    def normalize(self, image, remove_tag: bool = True) -> TransformDescriptor:
        """Apply the image's EXIF orientation to its pixels in place."""
        pass

    @abstractmethod
    def normalize_file(
        self,
        source_path: PathLike,
        target_path: PathLike,
        target_format: Optional[str] = None,
        remove_tag: bool = True
    ) -> TransformDescriptor:
        """Normalize a file, writing the target only when pixels changed."""
        pass


class ICropper(ABC):
    """Interface for rectangular crop operations."""

    @abstractmethod
    def crop(self, source, region: CropRegion, unit: CropUnit = CropUnit.PIXEL) -> bytes:
        """Crop and resample a region, encoded in the source's format."""
        pass

    @abstractmethod
    def crop_image(self, image, region: CropRegion, unit: CropUnit = CropUnit.PIXEL):
        """Crop and resample a region into a new raster image."""
        pass


class IImageProcessor(ABC):
    """Interface for the combined image geometry service."""

    @abstractmethod
    def fix_orientation(self, image, remove_tag: bool = True) -> TransformDescriptor:
        """Fix EXIF orientation of an in-memory image."""
        pass

    @abstractmethod
    def crop(self, source, region: CropRegion, unit: CropUnit = CropUnit.PIXEL) -> bytes:
        """Crop a region out of an image."""
        pass

    @abstractmethod
    def thumbnail(self, image, size: Optional[Tuple[int, int]] = None):
        """Orientation-corrected copy of an image resampled to a fixed size."""
        pass
