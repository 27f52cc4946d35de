# Path: imgsearch/search/ranking.py
# Purpose: Turn scored images into a thresholded, sorted, truncated, ranked result list.
# Layer: imgsearch/search.

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from imgsearch.models.domain import SearchResult


@dataclass
class ScoredImage:
    """An image paired with its fused score, before ranking."""

    image_path: Path
    similarity: float
    visual_score: Optional[float] = None
    aux_score: Optional[float] = None
    predicted_labels: Optional[List[str]] = None


def rank_results(candidates: Iterable[ScoredImage], threshold: float, max_results: int) -> List[SearchResult]:
    """
    Keep candidates scoring at least ``threshold``, best first, capped at ``max_results``.

    Sorting is stable, so equal scores keep their enumeration order. Ranks
    are assigned 1..n after truncation.
    """

    kept = [candidate for candidate in candidates if candidate.similarity >= threshold]
    kept.sort(key=lambda candidate: candidate.similarity, reverse=True)

    results: List[SearchResult] = []
    for rank, candidate in enumerate(kept[: max(max_results, 0)], start=1):
        results.append(
            SearchResult(
                image_path=candidate.image_path,
                file_name=candidate.image_path.name,
                similarity=candidate.similarity,
                rank=rank,
                visual_score=candidate.visual_score,
                aux_score=candidate.aux_score,
                predicted_labels=candidate.predicted_labels,
            )
        )
    return results
