# Path: imgsearch/__init__.py
# Purpose: Package initializer for the semantic image search application layer.
# Layer: imgsearch.
# Details: Aggregates embedders, auxiliary scorers, scanning, scoring, ranking, and orchestration.

__version__ = "0.1.0"
