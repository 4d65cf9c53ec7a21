"""Mixin for per-field attribute mapping.

Every Lightroom attribute is looked up in :data:`ATTRIBUTE_MAPPERS` and the
matching transform decides what, if anything, is written to the AfterShot
preset. Transforms are plain data (a kind plus its destination field and
coefficient), so the table can be inspected and checked before use.
"""

import dataclasses
import logging
import math
from typing import Mapping, Protocol

from lightroom2aftershot.core.base import ConverterProtocol
from lightroom2aftershot.core.constants import EQUALIZER_COLORS, equalizer_field
from lightroom2aftershot.core.diagnostics import TransformResult

logger = logging.getLogger(__name__)


class Transform(Protocol):
    """A per-field conversion rule."""

    @property
    def destinations(self) -> tuple[str, ...]: ...

    def apply(self, name: str, value: str) -> TransformResult: ...


def parse_float(value: str) -> float:
    """Parse a Lightroom number such as ``+25`` or ``-0.35``."""
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"{value!r} is not a finite number")
    return number


@dataclasses.dataclass(frozen=True)
class Copy:
    """Copy the raw value into another attribute."""

    destination: str

    @property
    def destinations(self) -> tuple[str, ...]:
        return (self.destination,)

    def apply(self, name: str, value: str) -> TransformResult:
        return TransformResult(writes={self.destination: value})


@dataclasses.dataclass(frozen=True)
class AbsoluteInt:
    """Write the absolute value, truncated to an integer."""

    destination: str

    @property
    def destinations(self) -> tuple[str, ...]:
        return (self.destination,)

    def apply(self, name: str, value: str) -> TransformResult:
        try:
            number = parse_float(value)
        except ValueError as e:
            return TransformResult.failure(
                name, f"Could not convert {name}={value!r} to a float: {e}"
            )
        return TransformResult(writes={self.destination: str(int(abs(number)))})


@dataclasses.dataclass(frozen=True)
class Multiply:
    """Multiply the value and write it with six decimals.

    Lightroom and AfterShot often use very different scales for the same
    setting, e.g. Lightroom shadows go up to 100 where AfterShot fill light
    goes up to 1.
    """

    destination: str
    multiplier: float

    @property
    def destinations(self) -> tuple[str, ...]:
        return (self.destination,)

    def apply(self, name: str, value: str) -> TransformResult:
        try:
            number = parse_float(value)
        except ValueError as e:
            return TransformResult.failure(
                name, f"Could not convert {name}={value!r} to a float: {e}"
            )
        scaled = number * self.multiplier
        return TransformResult(writes={self.destination: f"{scaled:f}"})


@dataclasses.dataclass(frozen=True)
class Unsupported:
    """Write nothing, warn if the setting is actually in use."""

    @property
    def destinations(self) -> tuple[str, ...]:
        return ()

    def apply(self, name: str, value: str) -> TransformResult:
        if value == "" or value == "0":
            return TransformResult()
        return TransformResult.failure(
            name,
            f"Cannot convert Lightroom setting '{name}' with value '{value}' "
            "to AfterShot",
        )


@dataclasses.dataclass(frozen=True)
class Ignore:
    """Write nothing."""

    @property
    def destinations(self) -> tuple[str, ...]:
        return ()

    def apply(self, name: str, value: str) -> TransformResult:
        return TransformResult()


UNSUPPORTED = Unsupported()
IGNORE = Ignore()

# Through trial and error, 100 in Lightroom is roughly 70 in AfterShot.
HUE_MULTIPLIER = 0.7

# Keys are Lightroom attribute names.
ATTRIBUTE_MAPPERS: dict[str, Transform] = {
    "Contrast2012": Copy("bopt:scont"),
    "Highlights2012": AbsoluteInt("bopt:highlightrecval"),
    "Shadows2012": Multiply("bopt:fillamount", 0.01),
    "Whites2012": UNSUPPORTED,
    "Blacks2012": UNSUPPORTED,
    "Clarity2012": UNSUPPORTED,
    "Vibrance": Copy("bopt:vibe"),
    "Saturation": Copy("bopt:sat"),
    **{
        f"HueAdjustment{color}": Multiply(
            equalizer_field(target, "hue"), HUE_MULTIPLIER
        )
        for color, target in EQUALIZER_COLORS.items()
    },
    # Saturation and luminance seem to be 1:1.
    **{
        f"SaturationAdjustment{color}": Copy(equalizer_field(target, "sat"))
        for color, target in EQUALIZER_COLORS.items()
    },
    **{
        f"LuminanceAdjustment{color}": Copy(equalizer_field(target, "lum"))
        for color, target in EQUALIZER_COLORS.items()
    },
    # Main sharpness defaults to 50 in Lightroom and 100 in AfterShot.
    "Sharpness": Multiply("bopt:newsharpen", 2),
    "SharpenRadius": IGNORE,
    "SharpenDetail": IGNORE,
    # Lightroom metadata.
    "Version": IGNORE,
    "UUID": IGNORE,
    "PresetType": IGNORE,
    "ProcessVersion": IGNORE,
    "SupportsColor": IGNORE,
    "SupportsOutputReferred": IGNORE,
    "SupportsNormalDynamicRange": IGNORE,
    "SupportsAmount": IGNORE,
    "SupportsHighDynamicRange": IGNORE,
    "SupportsMonochrome": IGNORE,
    "SupportsSceneReferred": IGNORE,
    "OverrideLookVignette": IGNORE,
    "HasSettings": IGNORE,
    "ToneCurveName2012": IGNORE,
    "CameraProfile": IGNORE,
    "about": IGNORE,
    # Handled by post-processing passes.
    "ConvertToGrayscale": IGNORE,
    "Texture": IGNORE,
    "Dehaze": IGNORE,
    "SplitToningBalance": IGNORE,
    "SplitToningShadowHue": IGNORE,
    "SplitToningShadowSaturation": IGNORE,
    "SplitToningHighlightHue": IGNORE,
    "SplitToningHighlightSaturation": IGNORE,
    "GrainAmount": IGNORE,
    "GrainFrequency": IGNORE,
    "GrainSize": IGNORE,
    "ColorNoiseReduction": IGNORE,
    "ColorNoiseReductionSmoothness": IGNORE,
    "ColorNoiseReductionDetail": IGNORE,
    "ParametricShadows": IGNORE,
    "ParametricDarks": IGNORE,
    "ParametricLights": IGNORE,
    "ParametricHighlights": IGNORE,
    "ParametricShadowSplit": IGNORE,
    "ParametricMidtoneSplit": IGNORE,
    "ParametricHighlightSplit": IGNORE,
    "HueAdjustmentPurple": IGNORE,
    "SaturationAdjustmentPurple": IGNORE,
    "LuminanceAdjustmentPurple": IGNORE,
    "ColorGradeMidtoneHue": IGNORE,
    "ColorGradeMidtoneSat": IGNORE,
    "ColorGradeBlending": IGNORE,
}


def check_mapper_table(mappers: Mapping[str, Transform]) -> None:
    """Raise ValueError if two source fields write the same target field.

    The mapping phase iterates over the source attributes in document order,
    so a shared destination would make the output depend on that order.
    """
    owners: dict[str, str] = {}
    for name, transform in mappers.items():
        for destination in transform.destinations:
            if destination in owners:
                raise ValueError(
                    f"'{name}' and '{owners[destination]}' both write '{destination}'"
                )
            owners[destination] = name


class AttributeMapperConverter(ConverterProtocol):
    """Mixin for per-field attribute mapping."""

    def map_attribute(self, name: str, value: str) -> TransformResult:
        """Apply the transform registered for one Lightroom attribute."""
        transform = self.mappers.get(name, UNSUPPORTED)
        result = transform.apply(name, value)
        self.apply_result(result, transform.destinations, owner=name)
        return result

    def map_attributes(self) -> None:
        """Map every non-empty Lightroom attribute."""
        for name, value in self.lightroom.attributes.items():
            if value == "":
                continue
            self.map_attribute(name, value)

