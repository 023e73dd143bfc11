"""Pydantic model for ARM ``/api/v2/ids`` responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from anisync.domain.model import Service


class ARMIds(BaseModel):
    model_config = ConfigDict(extra="ignore")

    anilist: int | None = None
    myanimelist: int | None = None
    anidb: int | None = None
    kitsu: int | None = None

    def id_for(self, service: Service) -> int | None:
        value = self.anilist if service is Service.ANILIST else self.myanimelist
        return value if value is not None and value > 0 else None
