from __future__ import annotations

import pytest

from tests.helpers.resolution import FakeDestinationService


@pytest.fixture
def fake_destination() -> FakeDestinationService:
    return FakeDestinationService()
