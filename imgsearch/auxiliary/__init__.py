# Path: imgsearch/auxiliary/__init__.py
# Purpose: Package initializer for auxiliary label providers.
# Layer: imgsearch/auxiliary.
# Details: Exposes the provider interface, the label embedding table, and the MobileNet implementation.

from .base import LabelProvider
from .label_table import LabelEmbeddingTable
from .mobilenet_scorer import MobileNetScorer

__all__ = ["LabelEmbeddingTable", "LabelProvider", "MobileNetScorer"]
