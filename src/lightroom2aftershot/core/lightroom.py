"""Lightroom preset document model.

Develop settings live as attributes of an ``rdf:Description`` element::

    <rdf:Description crs:Contrast2012="+25" crs:Shadows2012="+50" ...>

The tone curves are ordered lists, one per channel::

    <crs:ToneCurvePV2012>
        <rdf:Seq>
            <rdf:li>0, 18</rdf:li>
            <rdf:li>39, 28</rdf:li>
            <rdf:li>255, 240</rdf:li>
        </rdf:Seq>
    </crs:ToneCurvePV2012>
"""

import dataclasses
import logging
import xml.etree.ElementTree as ET
from typing import Any

import numpy as np

from lightroom2aftershot import xml_utils
from lightroom2aftershot.core.constants import (
    CHANNELS,
    LIGHTROOM_CURVE_MAX,
    LIGHTROOM_TONE_CURVES,
)
from lightroom2aftershot.core.diagnostics import Diagnostic
from lightroom2aftershot.core.tone_curve import Point

logger = logging.getLogger(__name__)


def _parse_component(
    text: str, item: str, field: str, diagnostics: list[Diagnostic]
) -> int:
    try:
        return int(text.strip())
    except ValueError:
        diagnostics.append(
            Diagnostic.warning(
                field, f"Could not convert curve point '{item}' to integers"
            )
        )
        return 0


def parse_point(
    text: str | None,
    field: str = "",
    diagnostics: list[Diagnostic] | None = None,
) -> Point:
    """Parse a ``"<input>, <output>"`` curve item.

    Malformed components count as 0 and values are clipped to the Lightroom
    range. Problems are appended to ``diagnostics`` when given.
    """
    if diagnostics is None:
        diagnostics = []
    item = text or ""
    parts = item.split(",")
    if len(parts) != 2:
        diagnostics.append(
            Diagnostic.warning(
                field, f"Curve point '{item}' is not an 'input, output' pair"
            )
        )
        parts = (parts + ["", ""])[:2]
    point = (
        _parse_component(parts[0], item, field, diagnostics),
        _parse_component(parts[1], item, field, diagnostics),
    )
    clipped = np.clip(point, 0, LIGHTROOM_CURVE_MAX)
    if tuple(clipped) != point:
        diagnostics.append(
            Diagnostic.warning(
                field,
                f"Curve point '{item}' is outside 0-{LIGHTROOM_CURVE_MAX}, clipping",
            )
        )
    return (int(clipped[0]), int(clipped[1]))


def parse_tone_curve(
    element: ET.Element, diagnostics: list[Diagnostic] | None = None
) -> list[Point]:
    """Collect the ``rdf:li`` points of a tone curve element."""
    field = xml_utils.local_name(element.tag)
    return [
        parse_point(li.text, field, diagnostics)
        for li in xml_utils.iter_local(element, "li")
    ]


@dataclasses.dataclass
class LightroomPreset:
    """Attributes and tone curve of a Lightroom preset.

    Example usage::

        from lightroom2aftershot.core.lightroom import LightroomPreset

        preset = LightroomPreset.parse("preset.xmp")
        preset.attributes["Contrast2012"]
        preset.tone_curve["rgb"]
        preset.diagnostics  # curve points that had to be fixed up
    """

    attributes: dict[str, str] = dataclasses.field(default_factory=dict)
    tone_curve: dict[str, list[Point]] = dataclasses.field(
        default_factory=lambda: {name: [] for name in CHANNELS}
    )
    diagnostics: list[Diagnostic] = dataclasses.field(default_factory=list)

    @classmethod
    def from_element(cls, root: ET.Element) -> "LightroomPreset":
        preset = cls()
        for element in root.iter():
            if not isinstance(element.tag, str):
                continue
            name = xml_utils.local_name(element.tag)
            if name == "Description":
                for key, value in element.attrib.items():
                    preset.attributes[xml_utils.local_name(key)] = value
            elif name in LIGHTROOM_TONE_CURVES:
                preset.tone_curve[LIGHTROOM_TONE_CURVES[name]] = parse_tone_curve(
                    element, preset.diagnostics
                )
        logger.debug(
            f"Read {len(preset.attributes)} attributes and "
            f"{sum(map(len, preset.tone_curve.values()))} curve points"
        )
        return preset

    @classmethod
    def parse(cls, file: Any) -> "LightroomPreset":
        """Read a preset from a path or file object."""
        return cls.from_element(xml_utils.parse(file))

    @classmethod
    def fromstring(cls, data: str | bytes) -> "LightroomPreset":
        return cls.from_element(xml_utils.fromstring(data))
