# Path: imgsearch/indexing/__init__.py
# Purpose: Package initializer for image discovery and decoding helpers.
# Layer: imgsearch/indexing.
# Details: Exposes the folder scanner and the batch image loader.

from .loader import ImageLoader, read_image
from .scanner import SUPPORTED_EXTENSIONS, ImageScanner, get_image_files, is_image_file

__all__ = ["ImageLoader", "ImageScanner", "SUPPORTED_EXTENSIONS", "get_image_files", "is_image_file", "read_image"]
