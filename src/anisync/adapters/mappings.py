"""Operator-maintained mappings file.

The file is TOML and read with :mod:`tomllib`; YAML mapping files written for
other sync tools have the same keys and must be converted before use.

Example ``mappings.toml``::

    [[manual_mappings]]
    anilist_id = 21
    mal_id = 21
    media_type = "anime"
    comment = "One Piece"

    [ignore]
    anilist_ids = [12345]
    mal_ids = []
    titles = ["Some Recap Special"]
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from anisync.config import ConfigurationError
from anisync.domain.model import MediaKind, Service
from anisync.domain.resolution import IgnoreRules

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)


class ManualMapping(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    anilist_id: int = Field(gt=0)
    mal_id: int = Field(gt=0)
    media_type: MediaKind | None = None
    comment: str | None = None


class IgnoreSection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    anilist_ids: list[int] = Field(default_factory=list)
    mal_ids: list[int] = Field(default_factory=list)
    titles: list[str] = Field(default_factory=list)


class MappingsFile(BaseModel):
    model_config = ConfigDict(extra="forbid")

    manual_mappings: list[ManualMapping] = Field(default_factory=list)
    ignore: IgnoreSection = Field(default_factory=IgnoreSection)


@dataclass(frozen=True, slots=True)
class ManualMappings:
    """Explicit AniList/MAL pairs; a pair without ``media_type`` applies to both kinds."""

    entries: tuple[ManualMapping, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def lookup(self, service: Service, kind: MediaKind, media_id: int) -> int | None:
        for mapping in self.entries:
            if mapping.media_type is not None and mapping.media_type is not kind:
                continue
            if service is Service.ANILIST and mapping.anilist_id == media_id:
                return mapping.mal_id
            if service is Service.MYANIMELIST and mapping.mal_id == media_id:
                return mapping.anilist_id
        return None


def load_mappings(path: Path) -> tuple[ManualMappings, IgnoreRules]:
    """Read ``path``; a missing file yields no mappings and the default ignore rules."""

    if not path.exists():
        log.debug("No mappings file at %s", path)
        return ManualMappings(), IgnoreRules.from_lists()

    try:
        with path.open("rb") as handle:
            document = tomllib.load(handle)
        parsed = MappingsFile.model_validate(document)
    except (tomllib.TOMLDecodeError, ValidationError) as exc:
        raise ConfigurationError(f"Invalid mappings file {path}: {exc}") from exc

    ignore = IgnoreRules.from_lists(
        titles=parsed.ignore.titles,
        anilist_ids=parsed.ignore.anilist_ids,
        mal_ids=parsed.ignore.mal_ids,
    )
    log.info(
        "Loaded %d manual mappings and %d ignore rules from %s",
        len(parsed.manual_mappings),
        len(parsed.ignore.titles) + len(parsed.ignore.anilist_ids) + len(parsed.ignore.mal_ids),
        path,
    )
    return ManualMappings(tuple(parsed.manual_mappings)), ignore
