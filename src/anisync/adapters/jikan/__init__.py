"""Jikan adapter."""

from __future__ import annotations

from .client import JikanAPIError, JikanClient
from .schema import JikanManga, JikanMangaResponse, JikanSearchResponse

__all__ = ["JikanAPIError", "JikanClient", "JikanManga", "JikanMangaResponse", "JikanSearchResponse"]
