# Path: imgsearch/search/pipeline.py
# Purpose: Orchestrate initialization and search across scanner, embedder, label provider, and ranker.
# Layer: imgsearch/search.
# Details: Tracks an Idle -> Initializing -> Ready -> Searching -> Done lifecycle with Failed on errors.

from __future__ import annotations

import enum
import logging
import time
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import numpy as np

from imgsearch.auxiliary.base import LabelProvider
from imgsearch.config.settings import SearchConfig
from imgsearch.embedders.base import Embedder
from imgsearch.errors import InferenceError, ProviderInitializationError, ProviderUnavailableError
from imgsearch.indexing.loader import ImageLoader, read_image
from imgsearch.indexing.scanner import ImageScanner
from imgsearch.models.domain import ModelInfo, SearchResponse, SearchStats, SelfCheckReport
from .ranking import ScoredImage, rank_results
from .scoring import cosine_similarity, score_breakdown

logger = logging.getLogger(__name__)


class SearchState(str, enum.Enum):
    IDLE = "idle"
    INITIALIZING = "initializing"
    READY = "ready"
    SEARCHING = "searching"
    DONE = "done"
    FAILED = "failed"


class ImageSearchEngine:
    """High-level service bridging the command line with the embedding and label providers."""

    def __init__(
        self,
        embedder: Embedder,
        label_provider: Optional[LabelProvider] = None,
        show_progress: bool = True,
    ) -> None:
        self.embedder = embedder
        self.label_provider = label_provider
        self.show_progress = show_progress
        self.state = SearchState.IDLE
        self._initialized = False
        self._model_info: Optional[ModelInfo] = None

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """
        Load the embedder and, when configured, the label provider with its label table.

        Any load error moves the engine to FAILED and is re-raised as
        ProviderInitializationError; initialization is not retried.
        """

        if self._initialized:
            logger.warning("Search engine already initialized")
            return
        if self.state is SearchState.FAILED:
            raise ProviderInitializationError("A previous initialization failed; create a new engine to retry.")

        self.state = SearchState.INITIALIZING
        try:
            self.embedder.initialize()
            if self.label_provider is not None:
                self.label_provider.initialize(self.embedder)
        except ProviderInitializationError:
            self.state = SearchState.FAILED
            raise
        except Exception as exc:  # noqa: BLE001 - every collaborator failure is fatal here
            self.state = SearchState.FAILED
            raise ProviderInitializationError(f"Initialization failed: {exc}") from exc

        label_count = len(self.label_provider.label_table) if self.label_provider is not None else 0
        self._model_info = ModelInfo(
            model_id=self.embedder.model_id,
            is_initialized=True,
            backend=self.embedder.backend,
            aux_label_count=label_count,
        )
        self._initialized = True
        self.state = SearchState.READY

    def get_model_info(self) -> ModelInfo:
        """Return the description computed at load time, or a placeholder before it."""

        if self._model_info is not None:
            return self._model_info
        return ModelInfo(model_id=self.embedder.model_id, is_initialized=False, backend=self.embedder.backend)

    def search(self, config: SearchConfig) -> SearchResponse:
        """
        Run one search: scan, decode, embed, score, fuse, and rank.

        Errors leave the engine in FAILED and propagate; no partial results are returned.
        Every call re-embeds every image.
        """

        self._ensure_initialized()
        self.state = SearchState.SEARCHING
        try:
            response = self._run_search(config)
        except Exception:
            self.state = SearchState.FAILED
            raise
        self.state = SearchState.DONE
        return response

    def _run_search(self, config: SearchConfig) -> SearchResponse:
        start = time.perf_counter()

        logger.info("Searching in: %s", config.image_folder)
        image_paths = ImageScanner(config.image_folder).scan()
        if not image_paths:
            return SearchResponse(results=[], stats=self._stats(0, 0, start, config.query))

        logger.info("Found %d image(s); query=%r threshold=%s", len(image_paths), config.query, config.threshold)
        kept_paths, images = ImageLoader(config.on_decode_error, self.show_progress).load(image_paths)

        image_vectors = self.embedder.embed_images(images)
        if len(image_vectors) != len(images):
            raise InferenceError(f"Expected {len(images)} image embeddings, got {len(image_vectors)}.")
        query_vector = self.embedder.embed_text(config.query)

        label_provider = self._active_label_provider(config)
        label_table = label_provider.label_table if label_provider is not None else None

        candidates: List[ScoredImage] = []
        for path, image, vector in zip(kept_paths, images, image_vectors):
            labels = label_provider.classify(image) if label_provider is not None else None
            breakdown = score_breakdown(vector, query_vector, labels, label_table, config.fusion_weight)
            candidates.append(
                ScoredImage(
                    image_path=path,
                    similarity=breakdown.fused,
                    visual_score=breakdown.visual,
                    aux_score=breakdown.aux,
                    predicted_labels=labels,
                )
            )

        results = rank_results(candidates, config.threshold, config.max_results)
        return SearchResponse(results=results, stats=self._stats(len(image_paths), len(results), start, config.query))

    def search_multiple(
        self,
        image_folder: Union[str, Path],
        queries: Sequence[str],
        threshold: float = 0.3,
        **options,
    ) -> Dict[str, SearchResponse]:
        """Run one independent search per query, keyed by query in input order."""

        responses: Dict[str, SearchResponse] = {}
        for query in queries:
            config = SearchConfig(image_folder=Path(image_folder), query=query, threshold=threshold, **options)
            responses[query] = self.search(config)
        return responses

    def self_check(self, image_folder: Union[str, Path]) -> Optional[SelfCheckReport]:
        """Embed the first image and a probe text and report dimensions, norms, and self-similarity."""

        self._ensure_initialized()
        image_paths = ImageScanner(image_folder).scan()
        if not image_paths:
            logger.info("Self-check: no images found in %s", image_folder)
            return None

        image_vector = self.embedder.embed_image(read_image(image_paths[0]))
        text_vector = self.embedder.embed_text("test")
        return SelfCheckReport(
            image_path=image_paths[0],
            image_dim=int(image_vector.shape[0]),
            image_norm=float(np.linalg.norm(image_vector)),
            text_dim=int(text_vector.shape[0]),
            text_norm=float(np.linalg.norm(text_vector)),
            self_cosine=cosine_similarity(image_vector, image_vector),
        )

    def _active_label_provider(self, config: SearchConfig) -> Optional[LabelProvider]:
        if not config.enable_aux_scorer:
            return None
        if self.label_provider is None or not self.label_provider.is_initialized:
            logger.warning("Auxiliary scoring requested but no label provider is loaded; using visual scores only")
            return None
        return self.label_provider

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise ProviderUnavailableError("Search engine not initialized. Call initialize() first.")

    @staticmethod
    def _stats(total: int, matching: int, start: float, query: str) -> SearchStats:
        return SearchStats(
            total_images=total,
            matching_images=matching,
            processing_time_ms=(time.perf_counter() - start) * 1000,
            query=query,
        )
