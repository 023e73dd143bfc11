"""Pydantic models for anime-offline-database files and GitHub release metadata."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class OfflineDatabaseEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    sources: list[str] = Field(default_factory=list)
    title: str = ""
    type: str = ""


class OfflineDatabasePayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    last_update: str | None = Field(default=None, alias="lastUpdate")
    data: list[OfflineDatabaseEntry] = Field(default_factory=list)


class ReleaseAsset(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    browser_download_url: str


class LatestRelease(BaseModel):
    model_config = ConfigDict(extra="ignore")

    tag_name: str
    assets: list[ReleaseAsset] = Field(default_factory=list)
