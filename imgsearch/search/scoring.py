# Path: imgsearch/search/scoring.py
# Purpose: Compute visual, label-semantic, and fused similarity scores.
# Layer: imgsearch/search.
# Details: Pure functions over pre-normalized vectors; no re-normalization happens here.

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

import numpy as np


@dataclass(frozen=True)
class ScoreBreakdown:
    """Fused score together with the components it was computed from."""

    fused: float
    visual: float
    aux: Optional[float] = None


def dot(a: np.ndarray, b: np.ndarray) -> float:
    """Dot product in double precision; equals cosine similarity for unit vectors."""

    a = np.asarray(a, dtype=np.float64).reshape(-1)
    b = np.asarray(b, dtype=np.float64).reshape(-1)
    if a.shape != b.shape:
        raise ValueError(f"Vector dimensionality mismatch: {a.shape[0]} vs {b.shape[0]}.")
    return float(np.dot(a, b))


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine similarity for arbitrary vectors; 0.0 when either vector is zero."""

    a = np.asarray(a, dtype=np.float64).reshape(-1)
    b = np.asarray(b, dtype=np.float64).reshape(-1)
    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot(a, b) / float(norm_a * norm_b)


def semantic_score(labels: Sequence[str], query_vector: np.ndarray, label_table: Mapping[str, np.ndarray]) -> float:
    """Best match between the query and any predicted label; labels missing from the table are ignored."""

    similarities = [dot(label_table[label], query_vector) for label in labels if label in label_table]
    return max(similarities) if similarities else 0.0


def fuse(visual: float, aux: float, fusion_weight: float) -> float:
    """Linear blend ``(1 - w) * visual + w * aux`` with ``w`` clamped to [0, 1]."""

    weight = float(fusion_weight)
    if math.isnan(weight):
        raise ValueError("Fusion weight must be a number, got NaN.")
    weight = min(max(weight, 0.0), 1.0)
    return (1.0 - weight) * visual + weight * aux


def score_breakdown(
    image_vector: np.ndarray,
    query_vector: np.ndarray,
    aux_labels: Optional[Sequence[str]] = None,
    label_table: Optional[Mapping[str, np.ndarray]] = None,
    fusion_weight: float = 0.3,
) -> ScoreBreakdown:
    """Score one image, blending in the label-semantic score when labels and a table are supplied."""

    visual = dot(image_vector, query_vector)
    if aux_labels is None or label_table is None:
        return ScoreBreakdown(fused=visual, visual=visual)

    aux = semantic_score(aux_labels, query_vector, label_table)
    return ScoreBreakdown(fused=fuse(visual, aux, fusion_weight), visual=visual, aux=aux)


def score(
    image_vector: np.ndarray,
    query_vector: np.ndarray,
    aux_labels: Optional[Sequence[str]] = None,
    label_table: Optional[Mapping[str, np.ndarray]] = None,
    fusion_weight: float = 0.3,
) -> float:
    """Return the fused similarity of one image against the query."""

    return score_breakdown(image_vector, query_vector, aux_labels, label_table, fusion_weight).fused
