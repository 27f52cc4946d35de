# Path: imgsearch/embedders/base.py
# Purpose: Define the Embedder interface for image and text embeddings.
# Layer: imgsearch/embedders.
# Details: Implementations must return L2-normalized vectors sharing one dimensionality.

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

import numpy as np
from PIL import Image


class Embedder(ABC):
    """Abstract base class for the embedding provider used by the search engine."""

    name: str
    model_id: str

    @property
    @abstractmethod
    def is_initialized(self) -> bool:
        """Return True once the model is ready to embed."""

    @property
    def backend(self) -> str:
        """Describe the inference backend; computed once at load time by implementations."""

        return "unknown"

    @abstractmethod
    def initialize(self) -> None:
        """Load the model, raising ProviderInitializationError on failure."""

    @abstractmethod
    def embed_images(self, images: Sequence[Image.Image]) -> List[np.ndarray]:
        """Return one normalized embedding per image, in input order."""

    @abstractmethod
    def embed_text(self, text: str) -> np.ndarray:
        """Return a normalized embedding for a text query."""

    def embed_image(self, image: Image.Image) -> np.ndarray:
        """Return a normalized embedding for a single image."""

        return self.embed_images([image])[0]

    def embed_texts(self, texts: Sequence[str]) -> List[np.ndarray]:
        """Return one normalized embedding per text; batched by implementations that can."""

        return [self.embed_text(text) for text in texts]

    @staticmethod
    def _normalize(vector: np.ndarray) -> np.ndarray:
        """Normalize embedding vectors to unit length to simplify similarity comparisons."""

        vector = np.asarray(vector, dtype=np.float64)
        norm = np.linalg.norm(vector)
        if norm == 0:
            return vector
        return vector / norm
