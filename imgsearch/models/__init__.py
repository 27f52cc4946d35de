# Path: imgsearch/models/__init__.py
# Purpose: Package initializer for domain model definitions.
# Layer: imgsearch/models.
# Details: Exposes dataclasses used across scanning, scoring, ranking, and reporting.

from .domain import ModelInfo, SearchResponse, SearchResult, SearchStats, SelfCheckReport

__all__ = ["ModelInfo", "SearchResponse", "SearchResult", "SearchStats", "SelfCheckReport"]
