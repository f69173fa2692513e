"""
Container formats and the file extensions that select them.
"""
from pathlib import Path
from typing import Optional

FORMAT_EXTENSIONS = {
    '.jpg': 'JPEG',
    '.jpeg': 'JPEG',
    '.jpe': 'JPEG',
    '.png': 'PNG',
    '.bmp': 'BMP',
    '.gif': 'GIF',
    '.tif': 'TIFF',
    '.tiff': 'TIFF',
    '.webp': 'WEBP',
}

IMAGE_EXTENSIONS = set(FORMAT_EXTENSIONS)

# Formats Pillow reads under a different name than the one it should write.
_FORMAT_ALIASES = {
    'JPG': 'JPEG',
    'JPE': 'JPEG',
    'MPO': 'JPEG',
    'TIF': 'TIFF',
}


def normalize_format(name: str) -> str:
    """Canonical Pillow format name for 'jpg', '.JPG', 'jpeg', 'MPO', ..."""
    key = name.strip().lstrip('.').upper()
    return _FORMAT_ALIASES.get(key, key)


def format_for_path(path) -> Optional[str]:
    """Format implied by the path's extension, or None."""
    return FORMAT_EXTENSIONS.get(Path(path).suffix.lower())


def is_image(path) -> bool:
    """Check if path has a supported image extension."""
    return Path(path).suffix.lower() in IMAGE_EXTENSIONS
