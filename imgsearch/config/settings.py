# Path: imgsearch/config/settings.py
# Purpose: Provide typed application and per-search configuration models.
# Layer: imgsearch/config.
# Details: Centralizes settings for the embedding model, the auxiliary label scorer, and search defaults.

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_QUERY_PREFIX = "Represent the query for retrieving evidence documents: "


class EmbedderSettings(BaseModel):
    """Settings describing which embedding model to load and how to run it."""

    model_config = ConfigDict(protected_namespaces=())

    model_id: str = Field(default="jinaai/jina-clip-v2", description="Hugging Face identifier of the CLIP-family model.")
    device: str = Field(default="cpu", description="Target device for model execution.")
    query_prefix: str = Field(
        default=DEFAULT_QUERY_PREFIX,
        description="Instruction prepended to every text before it is embedded.",
    )
    batch_size: int = Field(default=8, ge=1, description="Number of images embedded per model call.")
    truncate_dim: Optional[int] = Field(default=None, ge=1, description="Optional Matryoshka truncation dimension.")


class AuxScorerSettings(BaseModel):
    """Settings for the optional MobileNet v2 label classifier."""

    model_config = ConfigDict(protected_namespaces=())

    model_path: Path = Field(default=Path("models/mobilenet_v2.onnx"), description="Path to the ONNX classifier.")
    labels_path: Path = Field(
        default=Path("models/imagenet_labels.json"),
        description="JSON array of class labels indexed by class id.",
    )
    top_k: int = Field(default=20, ge=1, description="Number of predicted labels kept per image.")
    image_size: int = Field(default=224, ge=1, description="Square input resolution expected by the classifier.")
    input_name: str = Field(default="input", description="Name of the classifier's input tensor.")
    label_batch_size: int = Field(default=32, ge=1, description="Labels embedded per call while building the label table.")


class SearchConfig(BaseModel):
    """Parameters of a single search call."""

    image_folder: Path = Field(description="Folder scanned (non-recursively) for images.")
    query: str = Field(description="Free-text query.")
    threshold: float = Field(default=0.3, allow_inf_nan=False, description="Minimum fused similarity kept in the results.")
    max_results: int = Field(default=100, ge=1, description="Maximum number of ranked results returned.")
    enable_aux_scorer: bool = Field(default=False, description="Blend in the label-semantic score when available.")
    fusion_weight: float = Field(default=0.3, allow_inf_nan=False, description="Weight of the label-semantic score; clamped to [0, 1].")
    on_decode_error: Literal["abort", "skip"] = Field(
        default="abort",
        description="Abort the whole search or skip images that fail to decode.",
    )


class AppSettings(BaseModel):
    """Top-level application settings used by the command-line entry point."""

    image_folder: Path = Field(default=Path("images"), description="Folder containing user images.")
    query: str = Field(default="tennis", description="Query used when none is given on the command line.")
    threshold: float = Field(default=0.3, allow_inf_nan=False, description="Default similarity threshold.")
    max_results: int = Field(default=100, ge=1, description="Default result cap.")
    enable_aux_scorer: bool = Field(default=False, description="Load the auxiliary label scorer at startup.")
    fusion_weight: float = Field(default=0.3, allow_inf_nan=False, description="Default weight of the label-semantic score.")
    on_decode_error: Literal["abort", "skip"] = Field(default="abort", description="Image decode failure policy.")
    log_level: str = Field(default="INFO", description="Verbosity level for application logs.")
    self_check: bool = Field(default=False, description="Run the embedding self check before searching.")
    embedder: EmbedderSettings = Field(default_factory=EmbedderSettings)
    aux_scorer: AuxScorerSettings = Field(default_factory=AuxScorerSettings)

    @classmethod
    def from_env(cls) -> "AppSettings":
        """Instantiate settings, applying the environment overrides that are set."""

        overrides = {}
        if os.environ.get("IMGSEARCH_LOG_LEVEL"):
            overrides["log_level"] = os.environ["IMGSEARCH_LOG_LEVEL"]
        if os.environ.get("IMGSEARCH_IMAGE_FOLDER"):
            overrides["image_folder"] = Path(os.environ["IMGSEARCH_IMAGE_FOLDER"])
        if os.environ.get("SELF_CHECK"):
            overrides["self_check"] = True
        return cls(**overrides)

    def to_search_config(self, query: Optional[str] = None) -> SearchConfig:
        """Build the per-call search configuration from these defaults."""

        return SearchConfig(
            image_folder=self.image_folder,
            query=query if query is not None else self.query,
            threshold=self.threshold,
            max_results=self.max_results,
            enable_aux_scorer=self.enable_aux_scorer,
            fusion_weight=self.fusion_weight,
            on_decode_error=self.on_decode_error,
        )


__all__ = ["AppSettings", "AuxScorerSettings", "EmbedderSettings", "SearchConfig"]
