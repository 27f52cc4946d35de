# Path: imgsearch/auxiliary/label_table.py
# Purpose: Hold the precomputed label-to-embedding mapping of the auxiliary classifier.
# Layer: imgsearch/auxiliary.
# Details: Built once during initialization, read-only afterwards and safe to share between searches.

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Callable, Dict, Iterator, List, Optional, Sequence

import numpy as np
from tqdm import tqdm

logger = logging.getLogger(__name__)

EmbedTextsFn = Callable[[Sequence[str]], List[np.ndarray]]


class LabelEmbeddingTable(Mapping):
    """Immutable mapping from label string to its normalized embedding."""

    def __init__(self, embeddings: Optional[Dict[str, np.ndarray]] = None) -> None:
        frozen: Dict[str, np.ndarray] = {}
        dim: Optional[int] = None
        for label, vector in (embeddings or {}).items():
            array = np.array(vector, dtype=np.float64).reshape(-1)
            if dim is None:
                dim = array.shape[0]
            elif array.shape[0] != dim:
                raise ValueError(f"Label '{label}' has dimensionality {array.shape[0]}, expected {dim}.")
            array.setflags(write=False)
            frozen[label] = array
        self._embeddings = MappingProxyType(frozen)
        self.dim = dim

    @classmethod
    def build(
        cls,
        labels: Sequence[str],
        embed_texts: EmbedTextsFn,
        batch_size: int = 32,
        show_progress: bool = True,
    ) -> "LabelEmbeddingTable":
        """
        Embed every unique label, batch by batch.

        A batch that fails to embed is logged and its labels are left out of
        the table; lookups for them then simply miss.
        """

        unique_labels = list(dict.fromkeys(labels))
        embeddings: Dict[str, np.ndarray] = {}
        batches = range(0, len(unique_labels), batch_size)
        for start in tqdm(batches, desc="Embedding labels", unit="batch", disable=not show_progress):
            batch = unique_labels[start : start + batch_size]
            try:
                vectors = embed_texts(batch)
            except Exception as exc:  # noqa: BLE001 - a failed batch only shrinks the table
                logger.warning("Failed to embed labels %s..%s: %s", batch[0], batch[-1], exc)
                continue
            embeddings.update(zip(batch, vectors))

        logger.info("Cached embeddings for %d/%d labels", len(embeddings), len(unique_labels))
        return cls(embeddings)

    def __getitem__(self, label: str) -> np.ndarray:
        return self._embeddings[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self._embeddings)

    def __len__(self) -> int:
        return len(self._embeddings)
