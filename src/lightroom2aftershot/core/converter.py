import logging
from typing import Mapping, Sequence

from lightroom2aftershot.core.aftershot import AftershotPreset
from lightroom2aftershot.core.constants import (
    AFTERSHOT_NUM_POINTS,
    ALWAYS_ON_ATTRIBUTES,
    DEFAULT_ATTRIBUTES,
)
from lightroom2aftershot.core.diagnostics import Diagnostic, TransformResult
from lightroom2aftershot.core.lightroom import LightroomPreset
from lightroom2aftershot.core.mapping import (
    ATTRIBUTE_MAPPERS,
    AttributeMapperConverter,
    Transform,
    check_mapper_table,
)
from lightroom2aftershot.core.passes import (
    DEFAULT_PASSES,
    PostProcessConverter,
    PostProcessPass,
)
from lightroom2aftershot.core.tone_curve import CombinedToneCurve

logger = logging.getLogger(__name__)


def seed_attributes() -> dict[str, str]:
    """Baseline AfterShot attributes of every converted preset."""
    attributes = dict(DEFAULT_ATTRIBUTES)
    attributes.update(ALWAYS_ON_ATTRIBUTES)
    return attributes


class Converter(AttributeMapperConverter, PostProcessConverter):
    """Converter main class.

    Example usage:

        from lightroom2aftershot.core.converter import Converter
        from lightroom2aftershot.core.lightroom import LightroomPreset

        lightroom = LightroomPreset.parse("preset.xmp")
        converter = Converter(lightroom)
        preset = converter.build()
        preset.attributes["bopt:scont"]
        converter.diagnostics  # warnings about settings that were dropped

    The conversion seeds the default AfterShot attributes, reports problems
    with the tone curve, maps every Lightroom attribute through its
    transform, and runs the post-processing passes. A setting that cannot be
    converted never stops the conversion; it is reported in ``diagnostics``
    and logged.

    Args:
        lightroom: Source Lightroom preset.
        mappers: Optional transform table keyed by Lightroom attribute name.
            Defaults to :data:`~lightroom2aftershot.core.mapping.ATTRIBUTE_MAPPERS`.
        passes: Optional post-processing passes, run in the given order.
            Defaults to :data:`~lightroom2aftershot.core.passes.DEFAULT_PASSES`.
        curve_capacity: Number of point slots per curve channel. AfterShot
            uses 20.
    """

    def __init__(
        self,
        lightroom: LightroomPreset,
        mappers: Mapping[str, Transform] | None = None,
        passes: Sequence[PostProcessPass] | None = None,
        curve_capacity: int = AFTERSHOT_NUM_POINTS,
    ) -> None:
        if not isinstance(lightroom, LightroomPreset):
            raise TypeError("lightroom must be an instance of LightroomPreset")
        if curve_capacity < 2:
            raise ValueError(f"curve_capacity must be at least 2: {curve_capacity}")
        self.lightroom = lightroom
        self.mappers = ATTRIBUTE_MAPPERS if mappers is None else mappers
        self.passes = DEFAULT_PASSES if passes is None else passes
        check_mapper_table(self.mappers)

        # The curve does not depend on any attribute.
        self.preset = AftershotPreset(
            tone_curve=CombinedToneCurve.from_lightroom(lightroom.tone_curve),
            curve_capacity=curve_capacity,
        )
        self.diagnostics: list[Diagnostic] = []

    def build(self) -> AftershotPreset:
        """Run all conversion phases and return the AfterShot preset."""
        self.diagnostics = []
        self.seed()
        self.check_tone_curve()
        self.map_attributes()
        self.run_passes()
        return self.preset

    def seed(self) -> None:
        """Reset the AfterShot attributes to the baseline."""
        self.preset.attributes = seed_attributes()

    def check_tone_curve(self) -> None:
        """Report curve points that were fixed up or do not fit."""
        for diagnostic in self.lightroom.diagnostics:
            self.report(diagnostic)
        for diagnostic in self.preset.tone_curve.check(self.preset.curve_capacity):
            self.report(diagnostic)

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        diagnostic.log(logger)

    def apply_result(
        self, result: TransformResult, allowed: Sequence[str], owner: str
    ) -> None:
        """Write the result into the preset and record its diagnostics."""
        undeclared = [key for key in result.writes if key not in allowed]
        if undeclared:
            raise ValueError(f"{owner} wrote undeclared attributes: {undeclared}")
        self.preset.attributes.update(result.writes)
        for diagnostic in result.diagnostics:
            self.report(diagnostic)
