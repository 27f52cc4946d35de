# Path: imgsearch/auxiliary/mobilenet_scorer.py
# Purpose: Provide a MobileNet v2 ImageNet classifier as the auxiliary label provider.
# Layer: imgsearch/auxiliary.
# Details: Runs an ONNX export through onnxruntime; classification failures degrade to an empty label list.

from __future__ import annotations

import json
import logging
import time
from typing import Any, List, Optional

import numpy as np
from PIL import Image

from imgsearch.config.settings import AuxScorerSettings
from imgsearch.embedders.base import Embedder
from imgsearch.errors import ProviderInitializationError, ProviderUnavailableError

from .base import LabelProvider
from .label_table import LabelEmbeddingTable

logger = logging.getLogger(__name__)

IMAGENET_MEAN = np.array([0.485, 0.456, 0.406], dtype=np.float32)
IMAGENET_STD = np.array([0.229, 0.224, 0.225], dtype=np.float32)


class MobileNetScorer(LabelProvider):
    """ImageNet label classifier used for label-semantic scoring."""

    def __init__(self, settings: Optional[AuxScorerSettings] = None) -> None:
        self.settings = settings or AuxScorerSettings()
        self.name = "mobilenet_v2"
        self.labels: List[str] = []
        self._session: Any = None
        self._label_table: Optional[LabelEmbeddingTable] = None

    @property
    def is_initialized(self) -> bool:
        return self._session is not None and self._label_table is not None

    @property
    def label_table(self) -> LabelEmbeddingTable:
        if self._label_table is None:
            raise ProviderUnavailableError("MobileNet not initialized. Call initialize() first.")
        return self._label_table

    def initialize(self, embedder: Embedder) -> None:
        """Load the ONNX session and labels, then precompute label embeddings."""

        if self.is_initialized:
            logger.warning("MobileNet already initialized")
            return

        try:
            import onnxruntime as ort
        except ImportError as exc:  # pragma: no cover - runtime dependency
            raise ProviderInitializationError("onnxruntime is required for MobileNetScorer.") from exc

        logger.info("Loading MobileNet v2 auxiliary scorer from %s", self.settings.model_path)
        start = time.perf_counter()
        try:
            session = ort.InferenceSession(str(self.settings.model_path), providers=["CPUExecutionProvider"])
            labels = self._load_labels()
        except ProviderInitializationError:
            raise
        except Exception as exc:  # noqa: BLE001 - any load failure is fatal for the provider
            raise ProviderInitializationError(f"MobileNet initialization failed: {exc}") from exc
        logger.info("MobileNet loaded in %.2fs", time.perf_counter() - start)

        logger.info("Pre-computing embeddings for %d labels", len(labels))
        start = time.perf_counter()
        table = LabelEmbeddingTable.build(labels, embedder.embed_texts, batch_size=self.settings.label_batch_size)
        logger.info("Label embeddings cached in %.2fs", time.perf_counter() - start)

        self.labels = labels
        self._session = session
        self._label_table = table

    def _load_labels(self) -> List[str]:
        path = self.settings.labels_path
        try:
            labels = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ProviderInitializationError(f"Cannot read labels from {path}: {exc}") from exc
        if not isinstance(labels, list) or not all(isinstance(label, str) for label in labels):
            raise ProviderInitializationError(f"Labels file {path} must contain a JSON array of strings.")
        return labels

    def preprocess(self, image: Image.Image) -> np.ndarray:
        """Resize, scale to [0, 1], and normalize with ImageNet statistics into an NCHW tensor."""

        size = self.settings.image_size
        resized = image.convert("RGB").resize((size, size))
        pixels = np.asarray(resized, dtype=np.float32) / 255.0
        normalized = (pixels - IMAGENET_MEAN) / IMAGENET_STD
        return normalized.transpose(2, 0, 1)[np.newaxis, ...].astype(np.float32)

    def classify(self, image: Image.Image, top_k: Optional[int] = None) -> List[str]:
        """Return the top-K predicted labels, or an empty list when inference fails."""

        if not self.is_initialized:
            raise ProviderUnavailableError("MobileNet not initialized. Call initialize() first.")

        top_k = top_k or self.settings.top_k
        try:
            tensor = self.preprocess(image)
            outputs = self._session.run(None, {self.settings.input_name: tensor})
            logits = outputs[0] if outputs else None
            if logits is None or np.size(logits) == 0:
                logger.warning("MobileNet output is empty, skipping auxiliary scoring")
                return []

            flat = np.asarray(logits, dtype=np.float64).reshape(-1)
            indices = np.argsort(-flat, kind="stable")[:top_k]
            return [self.labels[i] if i < len(self.labels) else "unknown" for i in indices]
        except Exception as exc:  # noqa: BLE001 - classification is auxiliary, degrade to no labels
            logger.warning("MobileNet inference failed: %s", exc)
            return []

    @property
    def label_count(self) -> int:
        return len(self.labels)
