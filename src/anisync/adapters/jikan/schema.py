"""Pydantic models for Jikan v4 manga responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from anisync.domain.ports import CatalogManga


class JikanManga(BaseModel):
    model_config = ConfigDict(extra="ignore")

    mal_id: int
    title: str | None = None
    title_english: str | None = None
    title_japanese: str | None = None
    title_synonyms: list[str] = Field(default_factory=list)
    type: str | None = None
    chapters: int | None = None
    volumes: int | None = None
    status: str | None = None

    def to_catalog(self) -> CatalogManga:
        return CatalogManga(
            mal_id=self.mal_id,
            title=self.title or "",
            title_english=self.title_english or "",
            title_japanese=self.title_japanese or "",
            synonyms=tuple(synonym for synonym in self.title_synonyms if synonym),
        )


class JikanMangaResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    data: JikanManga


class JikanSearchResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    data: list[JikanManga] = Field(default_factory=list)
