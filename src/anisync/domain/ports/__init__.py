"""Domain port definitions for adapters."""

from __future__ import annotations

from .catalog import CatalogManga, MangaCatalog
from .crosswalk import CrosswalkLookup, CrosswalkLookupError
from .destination import DestinationService, DestinationUpdater

__all__ = [
    "CatalogManga",
    "CrosswalkLookup",
    "CrosswalkLookupError",
    "DestinationService",
    "DestinationUpdater",
    "MangaCatalog",
]
