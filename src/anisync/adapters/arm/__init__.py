"""ARM adapter."""

from __future__ import annotations

from .client import ARMAPIError, ARMClient
from .schema import ARMIds

__all__ = ["ARMAPIError", "ARMClient", "ARMIds"]
