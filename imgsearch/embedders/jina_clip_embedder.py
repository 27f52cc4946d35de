# Path: imgsearch/embedders/jina_clip_embedder.py
# Purpose: Provide the Jina-CLIP v2 embedder backed by Hugging Face transformers.
# Layer: imgsearch/embedders.
# Details: Loads the model lazily on initialize(); batches images and re-normalizes every returned vector.

from __future__ import annotations

import logging
import time
from typing import Any, List, Optional, Sequence

import numpy as np
from PIL import Image

from imgsearch.config.settings import EmbedderSettings
from imgsearch.errors import InferenceError, ProviderInitializationError, ProviderUnavailableError

from .base import Embedder

logger = logging.getLogger(__name__)


class JinaClipEmbedder(Embedder):
    """Multimodal embedder wrapping ``jinaai/jina-clip-v2``."""

    def __init__(self, settings: Optional[EmbedderSettings] = None) -> None:
        self.settings = settings or EmbedderSettings()
        self.model_id = self.settings.model_id
        self.name = "jina-clip"
        self._model: Any = None
        self._backend = ""

    @property
    def is_initialized(self) -> bool:
        return self._model is not None

    @property
    def backend(self) -> str:
        return self._backend or f"torch ({self.settings.device})"

    def initialize(self) -> None:
        """Load the model weights, downloading them on first run."""

        if self.is_initialized:
            logger.warning("Embedding model already initialized")
            return

        try:
            import torch
            from transformers import AutoModel
        except ImportError as exc:  # pragma: no cover - runtime dependency
            raise ProviderInitializationError("torch and transformers are required for JinaClipEmbedder.") from exc

        logger.info("Loading %s on %s (first run may download several hundred MB)", self.model_id, self.settings.device)
        start = time.perf_counter()
        try:
            model = AutoModel.from_pretrained(self.model_id, trust_remote_code=True)
            model.to(self.settings.device)
            model.eval()
        except Exception as exc:  # noqa: BLE001 - any load failure is fatal for the provider
            raise ProviderInitializationError(f"Failed to load embedding model {self.model_id}: {exc}") from exc

        self._model = model
        self._backend = f"torch {torch.__version__} ({self.settings.device})"
        logger.info("Model loaded: %s in %.2fs", self.model_id, time.perf_counter() - start)

    def embed_images(self, images: Sequence[Image.Image]) -> List[np.ndarray]:
        """Embed images in batches of ``settings.batch_size``."""

        self._ensure_initialized()
        if not images:
            return []

        vectors: List[np.ndarray] = []
        batch_size = self.settings.batch_size
        for start in range(0, len(images), batch_size):
            batch = list(images[start : start + batch_size])
            try:
                output = self._model.encode_image(batch, **self._encode_kwargs())
            except Exception as exc:  # noqa: BLE001 - surface as inference failure
                raise InferenceError(f"Image embedding failed: {exc}") from exc
            vectors.extend(self._rows(output, expected=len(batch)))
        return vectors

    def embed_text(self, text: str) -> np.ndarray:
        """Embed a query, prefixed with the retrieval instruction."""

        return self.embed_texts([text])[0]

    def embed_texts(self, texts: Sequence[str]) -> List[np.ndarray]:
        self._ensure_initialized()
        if not texts:
            return []

        prefixed = [self.settings.query_prefix + text for text in texts]
        try:
            output = self._model.encode_text(prefixed, **self._encode_kwargs())
        except Exception as exc:  # noqa: BLE001 - surface as inference failure
            raise InferenceError(f"Text embedding failed: {exc}") from exc
        return self._rows(output, expected=len(texts))

    def _encode_kwargs(self) -> dict:
        if self.settings.truncate_dim is None:
            return {}
        return {"truncate_dim": self.settings.truncate_dim}

    def _rows(self, output: Any, expected: int) -> List[np.ndarray]:
        """Split a model output into normalized row vectors, validating its shape."""

        if hasattr(output, "detach"):
            output = output.detach().cpu().numpy()
        matrix = np.asarray(output, dtype=np.float64)
        if matrix.ndim == 1:
            matrix = matrix.reshape(1, -1)
        if matrix.ndim != 2 or matrix.shape[0] != expected:
            raise InferenceError(f"Expected {expected} embeddings, model returned shape {matrix.shape}.")
        return [self._normalize(row) for row in matrix]

    def _ensure_initialized(self) -> None:
        if not self.is_initialized:
            raise ProviderUnavailableError("Model not initialized. Call initialize() first.")
