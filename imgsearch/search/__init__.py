# Path: imgsearch/search/__init__.py
# Purpose: Package initializer for scoring, ranking, and search orchestration.
# Layer: imgsearch/search.
# Details: Exposes the scoring functions, the ranker, and the search engine entrypoint.

from .pipeline import ImageSearchEngine, SearchState
from .ranking import ScoredImage, rank_results
from .scoring import ScoreBreakdown, cosine_similarity, dot, fuse, score, score_breakdown, semantic_score

__all__ = [
    "ImageSearchEngine",
    "SearchState",
    "ScoredImage",
    "rank_results",
    "ScoreBreakdown",
    "cosine_similarity",
    "dot",
    "fuse",
    "score",
    "score_breakdown",
    "semantic_score",
]
