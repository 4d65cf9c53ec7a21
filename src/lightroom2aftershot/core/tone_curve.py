"""Tone curve codecs for the AfterShot curve attributes.

AfterShot stores the curves of all four channels (RGB, R, G, B) in a handful
of comma separated attributes. Luminance values are 16 bit integers
(0-65535).

``bopt:curves_m_cn`` holds the number of points of each channel, prefixed
with ``4,1``. Every valid curve has at least 2 points (black and white)::

    4,1,4,2,2,2

``bopt:curves_m_cx`` and ``bopt:curves_m_cy`` hold the input and output
positions. They are prefixed with ``4,20`` and list 20 values per channel, of
which only the first ``curves_m_cn`` are read::

    4,20,0,30351,65535,0,0,...,0,65535,0,...

``bopt:curves_m_olo``/``bopt:curves_m_ohi`` are the output black and white
points, ``bopt:curves_m_ilo``/``bopt:curves_m_imid``/``bopt:curves_m_ihi``
the input black, mid (gamma) and white points. These are the triangles next
to the curve in AfterShot and are not the same as moving the end points of
the curve itself.
"""

import dataclasses
import logging
from typing import Iterable, Sequence

import numpy as np

from lightroom2aftershot.core.constants import (
    AFTERSHOT_CURVE_MAX,
    AFTERSHOT_NUM_POINTS,
    CHANNELS,
    CURVE_CHANNEL_COUNT,
    CURVE_SCALE,
    LIGHTROOM_TONE_CURVES,
)
from lightroom2aftershot.core.diagnostics import Diagnostic

logger = logging.getLogger(__name__)

Point = tuple[int, int]


def _slot(value: object) -> str:
    try:
        return str(int(value))  # type: ignore[call-overload]
    except (TypeError, ValueError, OverflowError):
        logger.warning(f"Curve value {value!r} is not an integer, using 0")
        return "0"


def scale_points(
    points: Sequence[Point], scale: int = CURVE_SCALE
) -> list[Point]:
    """Scale curve points by an integer ratio."""
    if len(points) == 0:
        return []
    scaled = np.asarray(points, dtype=np.int64).reshape(-1, 2) * scale
    return [(int(x), int(y)) for x, y in scaled]


@dataclasses.dataclass
class ToneCurveChannel:
    """Control points of one AfterShot curve channel."""

    points: list[Point] = dataclasses.field(default_factory=list)
    max_value: int = AFTERSHOT_CURVE_MAX

    def _serialize(self, values: Sequence[object], capacity: int) -> str:
        serialized = ["0"] * capacity

        # Every valid curve must have at least 2 points.
        if len(values) < 2:
            serialized[:2] = ["0", str(self.max_value)][:capacity]
        else:
            for index, value in enumerate(values[:capacity]):
                serialized[index] = _slot(value)

        return ",".join(serialized)

    def serialize_point_count(self, capacity: int = AFTERSHOT_NUM_POINTS) -> str:
        if len(self.points) < 2:
            return "2"
        return str(min(len(self.points), capacity))

    def serialize_points_in(self, capacity: int = AFTERSHOT_NUM_POINTS) -> str:
        return self._serialize([point[0] for point in self.points], capacity)

    def serialize_points_out(self, capacity: int = AFTERSHOT_NUM_POINTS) -> str:
        return self._serialize([point[1] for point in self.points], capacity)


@dataclasses.dataclass
class CombinedToneCurve:
    """The four curve channels of an AfterShot preset."""

    rgb: ToneCurveChannel = dataclasses.field(default_factory=ToneCurveChannel)
    red: ToneCurveChannel = dataclasses.field(default_factory=ToneCurveChannel)
    green: ToneCurveChannel = dataclasses.field(default_factory=ToneCurveChannel)
    blue: ToneCurveChannel = dataclasses.field(default_factory=ToneCurveChannel)

    @classmethod
    def from_lightroom(
        cls, channels: dict[str, Sequence[Point]], scale: int = CURVE_SCALE
    ) -> "CombinedToneCurve":
        """Build the curve from Lightroom points keyed by channel name."""
        return cls(
            **{
                name: ToneCurveChannel(scale_points(channels.get(name, []), scale))
                for name in CHANNELS
            }
        )

    def channels(self) -> Iterable[ToneCurveChannel]:
        return (getattr(self, name) for name in CHANNELS)

    def check(self, capacity: int = AFTERSHOT_NUM_POINTS) -> list[Diagnostic]:
        """Report channels with more points than AfterShot can store."""
        fields = {channel: field for field, channel in LIGHTROOM_TONE_CURVES.items()}
        return [
            Diagnostic.warning(
                fields[name],
                f"Curve has {len(channel.points)} points, only the first "
                f"{capacity} are kept",
            )
            for name, channel in zip(CHANNELS, self.channels())
            if len(channel.points) > capacity
        ]

    def serialize_point_count(self, capacity: int = AFTERSHOT_NUM_POINTS) -> str:
        counts = [c.serialize_point_count(capacity) for c in self.channels()]
        return ",".join([str(CURVE_CHANNEL_COUNT), "1", *counts])

    def serialize_points_in(self, capacity: int = AFTERSHOT_NUM_POINTS) -> str:
        lists = [c.serialize_points_in(capacity) for c in self.channels()]
        return ",".join([str(CURVE_CHANNEL_COUNT), str(capacity), *lists])

    def serialize_points_out(self, capacity: int = AFTERSHOT_NUM_POINTS) -> str:
        lists = [c.serialize_points_out(capacity) for c in self.channels()]
        return ",".join([str(CURVE_CHANNEL_COUNT), str(capacity), *lists])

    def to_attributes(self, capacity: int = AFTERSHOT_NUM_POINTS) -> dict[str, str]:
        """Serialize into the eight ``bopt:curves_m_*`` attributes."""
        header = f"{CURVE_CHANNEL_COUNT},1"
        max_list = ",".join(
            [header, *[str(AFTERSHOT_CURVE_MAX)] * CURVE_CHANNEL_COUNT]
        )
        logger.debug(f"Curve white points: {max_list}")
        return {
            "bopt:curves_m_cn": self.serialize_point_count(capacity),
            "bopt:curves_m_cx": self.serialize_points_in(capacity),
            "bopt:curves_m_cy": self.serialize_points_out(capacity),
            "bopt:curves_m_olo": f"{header},0,0,0,0",
            "bopt:curves_m_ohi": max_list,
            "bopt:curves_m_ilo": f"{header},0,0,0,0",
            "bopt:curves_m_imid": f"{header},1,1,1,1",
            "bopt:curves_m_ihi": max_list,
        }
