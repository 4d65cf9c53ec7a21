import logging
import os

import pytest

from lightroom2aftershot.core.lightroom import LightroomPreset

logger = logging.getLogger(__name__)


def get_fixture(name: str) -> str:
    """Get a fixture by name."""
    return os.path.join(os.path.dirname(__file__), "fixtures", name)


def make_preset(
    attributes: dict[str, str] | None = None,
    rgb: list[tuple[int, int]] | None = None,
) -> LightroomPreset:
    """Build a Lightroom preset in memory."""
    preset = LightroomPreset(attributes=dict(attributes or {}))
    if rgb is not None:
        preset.tone_curve["rgb"] = list(rgb)
    return preset


@pytest.fixture
def lightroom() -> LightroomPreset:
    """The Lightroom preset in fixtures/preset.xmp."""
    return LightroomPreset.parse(get_fixture("preset.xmp"))
