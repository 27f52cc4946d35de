# Path: imgsearch/errors.py
# Purpose: Define the error hierarchy raised by search components.
# Layer: imgsearch.
# Details: The command-line layer catches ImageSearchError; library code only raises.

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class ImageSearchError(Exception):
    """Base class for every error surfaced by the image search package."""


class DirectoryNotFound(ImageSearchError):
    """The folder that should be scanned for images does not exist."""

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)
        super().__init__(f"Directory not found: {directory}")

    @property
    def hint(self) -> str:
        """Remediation shown to users by the command-line layer."""

        return f"Create the {self.directory} folder and add some images\n   mkdir {self.directory}"


class ProviderInitializationError(ImageSearchError):
    """A model or other external collaborator failed to load."""


class ProviderUnavailableError(ImageSearchError):
    """A provider was used before it finished initializing."""


class ImageDecodeError(ImageSearchError):
    """A single image could not be read or decoded."""

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None) -> None:
        self.path = Path(path)
        message = f"Failed to decode image: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InferenceError(ImageSearchError):
    """An embedding or classification call failed or returned malformed output."""


__all__ = [
    "ImageSearchError",
    "DirectoryNotFound",
    "ProviderInitializationError",
    "ProviderUnavailableError",
    "ImageDecodeError",
    "InferenceError",
]
