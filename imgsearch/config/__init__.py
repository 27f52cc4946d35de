# Path: imgsearch/config/__init__.py
# Purpose: Package initializer for configuration module.
# Layer: imgsearch/config.
# Details: Exposes settings models for application-wide and per-search configuration.

from .settings import AppSettings, AuxScorerSettings, EmbedderSettings, SearchConfig

__all__ = ["AppSettings", "AuxScorerSettings", "EmbedderSettings", "SearchConfig"]
