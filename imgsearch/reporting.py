# Path: imgsearch/reporting.py
# Purpose: Render search responses as a human-readable console report.
# Layer: imgsearch.
# Details: Plain print-based output used by the command-line scripts.

from __future__ import annotations

from typing import List, Optional

from imgsearch.models.domain import ModelInfo, SearchResult, SearchStats, SelfCheckReport

MAX_LABELS_SHOWN = 5


def format_percentage(value: float, decimals: int = 2) -> str:
    return f"{value * 100:.{decimals}f}%"


def format_time(ms: float) -> str:
    """Format milliseconds as ``850ms``, ``2.35s``, or ``1m 5s``."""

    if ms < 1000:
        return f"{ms:.0f}ms"
    if ms < 60000:
        return f"{ms / 1000:.2f}s"
    minutes = int(ms // 60000)
    seconds = (ms % 60000) / 1000
    return f"{minutes}m {seconds:.0f}s"


def print_separator(char: str = "=", length: int = 60) -> None:
    print(char * length)


def print_model_info(info: ModelInfo) -> None:
    line = f"Model: {info.model_id} | Initialized: {info.is_initialized} | Backend: {info.backend}"
    if info.aux_label_count:
        line += f" | Aux labels: {info.aux_label_count}"
    print(line)


def print_self_check(report: Optional[SelfCheckReport]) -> None:
    if report is None:
        print("Self-check: no images found in folder")
        return
    print("SELF_CHECK")
    print(f"- image: {report.image_path.name}")
    print(f"- image embedding dim: {report.image_dim}, norm: {report.image_norm:.4f}")
    print(f"- text embedding dim: {report.text_dim}, norm: {report.text_norm:.4f}")
    print(f"- cosine(self,self): {report.self_cosine:.6f}")


def print_results(results: List[SearchResult], stats: SearchStats) -> None:
    """Print the statistics header followed by one block per ranked result."""

    print_separator()
    print("SEARCH RESULTS")
    print_separator()
    print(f'Query: "{stats.query}"')
    print(f"Processing time: {format_time(stats.processing_time_ms)}")
    print(f"Total images: {stats.total_images}")
    print(f"Matching images: {stats.matching_images}")
    print_separator()

    if not results:
        print("\nNo images matched the query.")
        print("Hint: try lowering the similarity threshold or using different keywords.\n")
        return

    print(f"\nFound {len(results)} matching image(s):\n")
    for result in results:
        print(f"{result.rank}. {result.file_name}")
        print(f"   Similarity: {format_percentage(result.similarity)} ({result.similarity:.4f})")
        if result.aux_score is not None and result.visual_score is not None:
            print(f"   Visual: {result.visual_score:.4f} | Labels: {result.aux_score:.4f}")
        if result.predicted_labels:
            print(f"   Predicted: {', '.join(result.predicted_labels[:MAX_LABELS_SHOWN])}")
        print(f"   Path: {result.image_path}")
        print("")

    print_separator()
