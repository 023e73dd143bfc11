"""Pydantic models for Hato mapping responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from anisync.domain.model import Service


class HatoMapping(BaseModel):
    model_config = ConfigDict(extra="ignore")

    anidb_id: int | None = None
    anilist_id: int | None = None
    kitsu_id: int | None = None
    mal_id: int | None = None
    notify_id: str | None = None
    type: int | None = None
    type_str: str | None = None

    def id_for(self, service: Service) -> int | None:
        value = self.anilist_id if service is Service.ANILIST else self.mal_id
        return value if value is not None and value > 0 else None


class HatoMappingResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    data: HatoMapping | None = None
