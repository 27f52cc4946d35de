# Path: imgsearch/indexing/scanner.py
# Purpose: List the image files of a folder.
# Layer: imgsearch/indexing.
# Details: Non-recursive scan filtered by a fixed, case-insensitive extension allow-list.

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Union

from imgsearch.errors import DirectoryNotFound

SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".bmp", ".webp", ".gif"}


def is_image_file(filename: Union[str, Path]) -> bool:
    """Return True when the file name carries a supported image extension."""

    return Path(filename).suffix.lower() in SUPPORTED_EXTENSIONS


class ImageScanner:
    """Scan a folder for supported image files."""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)

    def scan(self) -> List[Path]:
        """Return the image paths in directory-listing order.

        Raises DirectoryNotFound when the folder is missing; other filesystem
        errors propagate unchanged.
        """

        if not self.root.exists():
            raise DirectoryNotFound(self.root)
        return list(self._iter_image_files())

    def _iter_image_files(self) -> Iterable[Path]:
        """Yield image files directly under the root directory."""

        try:
            entries = list(self.root.iterdir())
        except FileNotFoundError as exc:
            raise DirectoryNotFound(self.root) from exc

        for path in entries:
            if path.is_file() and is_image_file(path.name):
                yield path


def get_image_files(directory: Union[str, Path]) -> List[Path]:
    """Convenience wrapper around :meth:`ImageScanner.scan`."""

    return ImageScanner(directory).scan()
