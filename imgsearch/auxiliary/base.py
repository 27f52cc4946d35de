# Path: imgsearch/auxiliary/base.py
# Purpose: Define the LabelProvider interface for auxiliary image classifiers.
# Layer: imgsearch/auxiliary.
# Details: Providers predict label strings per image and expose a precomputed label embedding table.

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from PIL import Image

from imgsearch.embedders.base import Embedder

from .label_table import LabelEmbeddingTable


class LabelProvider(ABC):
    """Optional classifier whose predicted labels refine visual ranking."""

    name: str

    @property
    @abstractmethod
    def is_initialized(self) -> bool:
        """Return True once the classifier and its label table are ready."""

    @property
    @abstractmethod
    def label_table(self) -> LabelEmbeddingTable:
        """Return the read-only label embedding table."""

    @abstractmethod
    def initialize(self, embedder: Embedder) -> None:
        """Load the classifier and precompute label embeddings with ``embedder``."""

    @abstractmethod
    def classify(self, image: Image.Image, top_k: Optional[int] = None) -> List[str]:
        """Return up to ``top_k`` labels, best first; an empty list when inference fails."""
