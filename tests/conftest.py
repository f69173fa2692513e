"""
Pytest configuration and fixtures for PhotoKit tests.
"""
import pytest
import tempfile
import shutil
from pathlib import Path
from PIL import Image
import numpy as np

from photokit import ORIENTATION_TAG, RasterImage


def save_oriented(path: Path, orientation=None, size=(40, 20), fmt="JPEG", dpi=(300, 300)) -> Path:
    """Save a solid image, optionally tagged with an EXIF orientation."""
    img = Image.new("RGB", size, color="blue")
    options = {"dpi": dpi}
    if orientation is not None:
        exif = Image.Exif()
        exif[ORIENTATION_TAG] = orientation
        options["exif"] = exif
    img.save(path, fmt, **options)
    return path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp(prefix="photokit_test_"))
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_image(temp_dir) -> Path:
    """Create a 1000x1000 JPEG at 300 dpi."""
    image_path = temp_dir / "test_image.jpg"
    img = Image.new("RGB", (1000, 1000), color="blue")
    img.save(image_path, "JPEG", quality=90, dpi=(300, 300))
    return image_path


@pytest.fixture
def rotated_image(temp_dir) -> Path:
    """Create a 40x20 JPEG tagged with orientation 6 (rotate 90 clockwise)."""
    return save_oriented(temp_dir / "rotated.jpg", orientation=6)


@pytest.fixture
def upright_image(temp_dir) -> Path:
    """Create a 40x20 JPEG tagged with orientation 1."""
    return save_oriented(temp_dir / "upright.jpg", orientation=1)


@pytest.fixture
def untagged_image(temp_dir) -> Path:
    """Create a 40x20 JPEG without EXIF data."""
    return save_oriented(temp_dir / "untagged.jpg")


@pytest.fixture
def png_image(temp_dir) -> Path:
    """Create a PNG image with transparency."""
    image_path = temp_dir / "transparent.png"
    img = Image.new("RGBA", (400, 400), color=(255, 0, 0, 128))
    img.save(image_path, "PNG")
    return image_path


@pytest.fixture
def grid():
    """2x3 grayscale image whose pixel values are their row-major index."""
    return Image.fromarray(np.array([[0, 1, 2], [3, 4, 5]], dtype=np.uint8))


@pytest.fixture
def tagged_grid(grid):
    """RasterImage factory around the grid with a raw orientation tag."""
    def make(orientation):
        return RasterImage(pixels=grid, tags={ORIENTATION_TAG: bytes([orientation, 0])})
    return make


@pytest.fixture
def make_oriented(temp_dir):
    """Factory saving tagged images into the temp directory."""
    def make(name, **kwargs):
        return save_oriented(temp_dir / name, **kwargs)
    return make
