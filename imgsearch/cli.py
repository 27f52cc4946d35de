# Path: imgsearch/cli.py
# Purpose: Command-line entry point ranking the images of a folder against one or more text queries.
# Layer: imgsearch.
# Details: Wires settings, the Jina-CLIP embedder, the optional MobileNet scorer, and console reporting together.

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from imgsearch.auxiliary.mobilenet_scorer import MobileNetScorer
from imgsearch.config import AppSettings
from imgsearch.embedders.base import Embedder
from imgsearch.embedders.jina_clip_embedder import JinaClipEmbedder
from imgsearch.errors import DirectoryNotFound, ImageSearchError
from imgsearch.reporting import print_model_info, print_results, print_self_check
from imgsearch.search.pipeline import ImageSearchEngine

logger = logging.getLogger(__name__)


def build_parser(settings: AppSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rank local images by semantic similarity to a text query")
    parser.add_argument("--folder", type=Path, default=settings.image_folder, help="Folder containing images")
    parser.add_argument(
        "--query",
        action="append",
        dest="queries",
        help="Text query; repeat to run several queries against the same folder",
    )
    parser.add_argument("--threshold", type=float, default=settings.threshold, help="Minimum similarity to report")
    parser.add_argument("--max-results", type=int, default=settings.max_results, help="Maximum results per query")
    parser.add_argument(
        "--aux",
        action="store_true",
        default=settings.enable_aux_scorer,
        help="Blend MobileNet label similarity into the ranking",
    )
    parser.add_argument(
        "--fusion-weight",
        type=float,
        default=settings.fusion_weight,
        help="Weight of the label similarity in [0, 1]",
    )
    parser.add_argument(
        "--skip-unreadable",
        action="store_true",
        default=settings.on_decode_error == "skip",
        help="Skip images that fail to decode instead of aborting",
    )
    parser.add_argument(
        "--self-check",
        action="store_true",
        default=settings.self_check,
        help="Print embedding dimensions and norms before searching",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging verbosity")
    return parser


def build_engine(settings: AppSettings, embedder: Optional[Embedder] = None) -> ImageSearchEngine:
    """Create the search engine, loading the auxiliary scorer only when it is enabled."""

    label_provider = MobileNetScorer(settings.aux_scorer) if settings.enable_aux_scorer else None
    return ImageSearchEngine(embedder or JinaClipEmbedder(settings.embedder), label_provider=label_provider)


def main(argv: Optional[List[str]] = None, embedder: Optional[Embedder] = None) -> int:
    """Run the search CLI and return the process exit status."""

    settings = AppSettings.from_env()
    args = build_parser(settings).parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    settings = settings.model_copy(
        update={
            "image_folder": args.folder,
            "threshold": args.threshold,
            "max_results": args.max_results,
            "enable_aux_scorer": args.aux,
            "fusion_weight": args.fusion_weight,
            "on_decode_error": "skip" if args.skip_unreadable else "abort",
            "self_check": args.self_check,
        }
    )
    queries = args.queries or [settings.query]

    try:
        engine = build_engine(settings, embedder)
        engine.initialize()
        print_model_info(engine.get_model_info())

        if settings.self_check:
            print_self_check(engine.self_check(settings.image_folder))

        if len(queries) == 1:
            response = engine.search(settings.to_search_config(queries[0]))
            print_results(response.results, response.stats)
        else:
            responses = engine.search_multiple(
                settings.image_folder,
                queries,
                threshold=settings.threshold,
                max_results=settings.max_results,
                enable_aux_scorer=settings.enable_aux_scorer,
                fusion_weight=settings.fusion_weight,
                on_decode_error=settings.on_decode_error,
            )
            for response in responses.values():
                print_results(response.results, response.stats)
    except ValidationError as exc:
        print(f"\nError (invalid configuration): {exc}", file=sys.stderr)
        return 1
    except ImageSearchError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        print(f"\nError ({type(exc).__name__}): {exc}", file=sys.stderr)
        if isinstance(exc, DirectoryNotFound):
            print(f"\nHint: {exc.hint}", file=sys.stderr)
        return 1
    except Exception as exc:  # noqa: BLE001 - report unexpected failures instead of a traceback
        logger.error("Unexpected %s: %s", type(exc).__name__, exc)
        print(f"\nError ({type(exc).__name__}): {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
