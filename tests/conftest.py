from __future__ import annotations

import pytest

from bmp_samples import RecordingBuilder


@pytest.fixture
def recorder() -> RecordingBuilder:
    return RecordingBuilder()
