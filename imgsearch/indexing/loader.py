# Path: imgsearch/indexing/loader.py
# Purpose: Decode image files into RGB PIL images ahead of embedding.
# Layer: imgsearch/indexing.
# Details: Applies the configured decode failure policy and reports progress with tqdm.

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Literal, Sequence, Tuple

from PIL import Image, UnidentifiedImageError
from tqdm import tqdm

from imgsearch.errors import ImageDecodeError

logger = logging.getLogger(__name__)


def read_image(path: Path) -> Image.Image:
    """Open and fully decode an image, converting it to RGB."""

    try:
        with Image.open(path) as image:
            image.load()
            return image.convert("RGB")
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise ImageDecodeError(path, str(exc)) from exc


class ImageLoader:
    """Decode a batch of image paths under an abort-or-skip policy."""

    def __init__(self, on_error: Literal["abort", "skip"] = "abort", show_progress: bool = True) -> None:
        self.on_error = on_error
        self.show_progress = show_progress

    def load(self, paths: Sequence[Path]) -> Tuple[List[Path], List[Image.Image]]:
        """
        Decode every path, returning the kept paths alongside their images.

        With ``on_error="abort"`` the first ImageDecodeError propagates and no
        images are returned; with ``on_error="skip"`` the failing image is
        logged and left out.
        """

        kept_paths: List[Path] = []
        images: List[Image.Image] = []
        for path in tqdm(paths, desc="Decoding images", unit="img", disable=not self.show_progress):
            try:
                image = read_image(path)
            except ImageDecodeError as exc:
                if self.on_error == "abort":
                    raise
                logger.warning("Skipping unreadable image: %s", exc)
                continue
            kept_paths.append(path)
            images.append(image)
        return kept_paths, images
