"""Hato adapter."""

from __future__ import annotations

from .client import HatoAPIError, HatoClient
from .schema import HatoMapping, HatoMappingResponse

__all__ = ["HatoAPIError", "HatoClient", "HatoMapping", "HatoMappingResponse"]
