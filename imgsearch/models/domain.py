# Path: imgsearch/models/domain.py
# Purpose: Define value objects returned by the search workflow.
# Layer: imgsearch/models.
# Details: Lightweight dataclasses keep results and statistics independent of any model runtime.

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional


@dataclass
class SearchResult:
    """A ranked image with its fused similarity and optional score breakdown."""

    image_path: Path
    file_name: str
    similarity: float
    rank: int = 0
    visual_score: Optional[float] = None
    aux_score: Optional[float] = None
    predicted_labels: Optional[List[str]] = None


@dataclass(frozen=True)
class SearchStats:
    """Statistics describing a completed search."""

    total_images: int
    matching_images: int
    processing_time_ms: float
    query: str


@dataclass
class SearchResponse:
    """Ranked results plus the statistics of the search that produced them."""

    results: List[SearchResult]
    stats: SearchStats


@dataclass(frozen=True)
class ModelInfo:
    """Read-only description of the loaded models."""

    model_id: str
    is_initialized: bool
    backend: str
    aux_label_count: int = 0


@dataclass(frozen=True)
class SelfCheckReport:
    """Embedding sanity figures for one image and one text."""

    image_path: Path
    image_dim: int
    image_norm: float
    text_dim: int
    text_norm: float
    self_cosine: float
