"""
Tests for the ImageProcessor facade.
"""
import logging
import pytest
from unittest.mock import Mock
from PIL import Image

from photokit import (
    ORIENTATION_TAG,
    IDENTITY,
    Rotation,
    Flip,
    TransformDescriptor,
    CropRegion,
    RasterImage,
    ImageProcessor,
    ProcessorConfig,
    CodecConfig,
    DecodeError,
)


class TestProcessorConfig:
    """Tests for ProcessorConfig dataclass."""

    def test_defaults(self):
        config = ProcessorConfig()

        assert config.thumbnail_size == (150, 200)
        assert config.codec.jpeg_quality == 90
        assert config.codec.default_format == "PNG"

    def test_custom_values(self):
        config = ProcessorConfig(codec=CodecConfig(jpeg_quality=75), thumbnail_size=(64, 64))

        assert config.codec.jpeg_quality == 75
        assert config.thumbnail_size == (64, 64)


class TestImageProcessor:
    """Tests for ImageProcessor class."""

    def test_creation(self):
        processor = ImageProcessor()

        assert processor.codec is processor.cropper.codec
        assert processor.codec is processor.normalizer.codec

    def test_shared_logger(self):
        logger = Mock(spec=logging.Logger)
        processor = ImageProcessor(logger=logger)

        assert processor.codec.logger is logger
        assert processor.cropper.logger is logger
        assert processor.normalizer.logger is logger

    def test_crop(self, sample_image):
        processor = ImageProcessor()
        data = processor.crop(sample_image.read_bytes(), CropRegion(0, 0, 500, 500))

        assert processor.codec.decode(data).size == (500, 500)

    def test_crop_logs_decode_error_once(self):
        logger = Mock(spec=logging.Logger)

        with pytest.raises(DecodeError):
            ImageProcessor(logger=logger).crop(b"nope", CropRegion(0, 0, 1, 1))

        logger.error.assert_called_once()

    def test_crop_file(self, sample_image, temp_dir):
        output = temp_dir / "crop.png"
        result = ImageProcessor().crop_file(sample_image, output, CropRegion(10, 10, 100.4, 100.6))

        assert result == output
        with Image.open(output) as img:
            assert img.format == "PNG"
            assert img.size == (101, 101)

    def test_crop_file_unknown_extension_keeps_source_format(self, sample_image, temp_dir):
        output = temp_dir / "crop.out"
        ImageProcessor().crop_file(sample_image, output, CropRegion(0, 0, 10, 10))

        with Image.open(output) as img:
            assert img.format == "JPEG"

    def test_fix_orientation(self, grid):
        image = RasterImage(pixels=grid, tags={ORIENTATION_TAG: 6})
        transform = ImageProcessor().fix_orientation(image, remove_tag=False)

        assert transform == TransformDescriptor(Rotation.CW_90, Flip.NONE)
        assert image.size == (2, 3)
        assert ORIENTATION_TAG in image.tags

    def test_fix_orientation_file(self, rotated_image, upright_image, temp_dir):
        processor = ImageProcessor()

        assert processor.fix_orientation_file(rotated_image, temp_dir / "a.jpg").swaps_dimensions
        assert processor.fix_orientation_file(upright_image, temp_dir / "b.jpg") == IDENTITY
        assert (temp_dir / "a.jpg").exists()
        assert not (temp_dir / "b.jpg").exists()


class TestThumbnail:
    """Tests for ImageProcessor.thumbnail."""

    def test_rotated_before_resize(self):
        source = RasterImage(pixels=Image.new("RGB", (400, 300)), tags={ORIENTATION_TAG: 6})
        thumb = ImageProcessor().thumbnail(source)

        assert thumb.size == (150, 200)
        assert ORIENTATION_TAG not in thumb.tags

    def test_source_untouched(self):
        pixels = Image.new("RGB", (400, 300))
        source = RasterImage(pixels=pixels, tags={ORIENTATION_TAG: 6})
        ImageProcessor().thumbnail(source)

        assert source.pixels is pixels
        assert source.tags == {ORIENTATION_TAG: 6}

    def test_stretches_to_exact_size(self):
        source = RasterImage(pixels=Image.new("RGB", (1000, 500)))
        thumb = ImageProcessor().thumbnail(source)

        assert thumb.size == (150, 200)

    def test_upscales_small_source(self):
        source = RasterImage(pixels=Image.new("RGB", (40, 30), (12, 34, 56)))
        thumb = ImageProcessor().thumbnail(source)

        assert thumb.size == (150, 200)
        assert thumb.pixels.getextrema() == ((12, 12), (34, 34), (56, 56))

    def test_configured_size(self):
        config = ProcessorConfig(thumbnail_size=(32, 32))
        source = RasterImage(pixels=Image.new("RGB", (64, 128)))

        assert ImageProcessor(config).thumbnail(source).size == (32, 32)

    def test_explicit_size(self):
        source = RasterImage(pixels=Image.new("RGB", (64, 128)))

        assert ImageProcessor().thumbnail(source, (10, 20)).size == (10, 20)

    def test_same_size_is_a_copy(self):
        pixels = Image.new("RGB", (150, 200), "black")
        thumb = ImageProcessor().thumbnail(RasterImage(pixels=pixels))
        thumb.pixels.paste((255, 255, 255), (0, 0, 10, 10))

        assert thumb.pixels is not pixels
        assert pixels.getpixel((0, 0)) == (0, 0, 0)

    def test_keeps_resolution_and_format(self):
        source = RasterImage(pixels=Image.new("RGB", (400, 400)), resolution=(300.0, 300.0), format="JPEG")
        thumb = ImageProcessor().thumbnail(source)

        assert thumb.resolution == (300.0, 300.0)
        assert thumb.format == "JPEG"


class TestFitThumbnail:
    """Tests for ImageProcessor.fit_thumbnail."""

    def test_keeps_aspect_ratio(self):
        source = RasterImage(pixels=Image.new("RGB", (1000, 500)))
        thumb = ImageProcessor().fit_thumbnail(source, (100, 100))

        assert thumb.size == (100, 50)

    def test_never_upscales(self):
        source = RasterImage(pixels=Image.new("RGB", (40, 30)))
        thumb = ImageProcessor().fit_thumbnail(source)

        assert thumb.size == (40, 30)

    def test_configured_size(self):
        config = ProcessorConfig(thumbnail_size=(32, 32))
        source = RasterImage(pixels=Image.new("RGB", (64, 128)))

        assert ImageProcessor(config).fit_thumbnail(source).size == (16, 32)

    def test_rotated_before_resize(self):
        source = RasterImage(pixels=Image.new("RGB", (400, 300)), tags={ORIENTATION_TAG: 6})
        thumb = ImageProcessor().fit_thumbnail(source)

        assert thumb.size == (150, 200)
        assert ORIENTATION_TAG not in thumb.tags

    def test_small_source_is_a_copy(self):
        pixels = Image.new("RGB", (40, 30), "black")
        thumb = ImageProcessor().fit_thumbnail(RasterImage(pixels=pixels))
        thumb.pixels.paste((255, 255, 255), (0, 0, 10, 10))

        assert thumb.pixels is not pixels
        assert pixels.getpixel((0, 0)) == (0, 0, 0)


class TestIsValidImage:
    """Tests for ImageProcessor.is_valid_image."""

    def test_is_valid_image(self, sample_image):
        assert ImageProcessor.is_valid_image(sample_image) is True

    def test_is_valid_image_false_for_directory(self, temp_dir):
        assert ImageProcessor.is_valid_image(temp_dir) is False

    def test_is_valid_image_false_for_nonexistent(self, temp_dir):
        assert ImageProcessor.is_valid_image(temp_dir / "nonexistent.jpg") is False

    def test_is_valid_image_false_for_wrong_extension(self, temp_dir):
        txt_file = temp_dir / "test.txt"
        txt_file.write_text("not an image")
        assert ImageProcessor.is_valid_image(txt_file) is False
