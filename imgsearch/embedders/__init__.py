# Path: imgsearch/embedders/__init__.py
# Purpose: Package initializer for embedder implementations and interfaces.
# Layer: imgsearch/embedders.
# Details: Exposes the base interface and the Jina-CLIP implementation.

from .base import Embedder
from .jina_clip_embedder import JinaClipEmbedder

__all__ = ["Embedder", "JinaClipEmbedder"]
