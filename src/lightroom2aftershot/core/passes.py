"""Mixin for post-processing passes.

Passes run after the per-field mapping, in the order of :data:`DEFAULT_PASSES`.
Each pass reads the Lightroom attributes it lists in ``reads``, may look at
the AfterShot attributes produced so far, and may only write the AfterShot
attributes it lists in ``writes``. A later pass may override an earlier
write, e.g. grayscale forces the saturation set by the mapping phase to 0.
"""

import dataclasses
import logging
from typing import ClassVar, Mapping

from lightroom2aftershot.core.base import ConverterProtocol
from lightroom2aftershot.core.diagnostics import Diagnostic, TransformResult
from lightroom2aftershot.core.mapping import parse_float

logger = logging.getLogger(__name__)


def is_nonzero(value: str | None) -> bool:
    """Whether a Lightroom number is set to anything but zero.

    Raises:
        ValueError: If the value is not a number.
    """
    if value is None or value == "":
        return False
    return parse_float(value) != 0


def deviates(value: str | None, neutral: float) -> bool:
    """Whether a Lightroom number differs from its neutral value."""
    if value is None or value == "":
        return False
    try:
        return parse_float(value) != neutral
    except ValueError:
        return True


class PostProcessPass:
    """Base class of the cross-field passes."""

    reads: ClassVar[tuple[str, ...]] = ()
    writes: ClassVar[tuple[str, ...]] = ()

    def apply(
        self, lightroom: Mapping[str, str], aftershot: Mapping[str, str]
    ) -> TransformResult:
        raise NotImplementedError


@dataclasses.dataclass(frozen=True)
class GrayscalePass(PostProcessPass):
    """Grayscale conversion is zero saturation."""

    reads = ("ConvertToGrayscale",)
    writes = ("bopt:sat",)

    def apply(
        self, lightroom: Mapping[str, str], aftershot: Mapping[str, str]
    ) -> TransformResult:
        if lightroom.get("ConvertToGrayscale") == "True":
            return TransformResult(writes={"bopt:sat": "0"})
        return TransformResult()


@dataclasses.dataclass(frozen=True)
class TexturePass(PostProcessPass):
    """Texture becomes the wavelet sharpen plugin's USM in clarity mode."""

    # Approximated, not compared against a Lightroom rendering.
    radius: str = "10"

    reads = ("Texture",)
    writes = (
        "bopt:WaveletSharpen2.bSphWaveletUsmon",
        "bopt:WaveletSharpen2.bSphWaveletUsmClarity",
        "bopt:WaveletSharpen2.bSphWaveletUsmRadius",
        "bopt:WaveletSharpen2.bSphWaveletUsmAmount",
    )

    def apply(
        self, lightroom: Mapping[str, str], aftershot: Mapping[str, str]
    ) -> TransformResult:
        texture = lightroom.get("Texture")
        try:
            if not is_nonzero(texture):
                return TransformResult()
        except ValueError as e:
            return TransformResult.failure(
                "Texture", f"Could not convert Texture={texture!r} to a float: {e}"
            )
        return TransformResult(
            writes={
                "bopt:WaveletSharpen2.bSphWaveletUsmon": "true",
                "bopt:WaveletSharpen2.bSphWaveletUsmClarity": "true",
                "bopt:WaveletSharpen2.bSphWaveletUsmRadius": self.radius,
                "bopt:WaveletSharpen2.bSphWaveletUsmAmount": str(texture),
            },
            diagnostics=(
                Diagnostic.info(
                    "Texture",
                    "Texture is translated to usage of the wavelet sharpen "
                    "plugin. Make sure you have that plugin installed",
                ),
            ),
        )


@dataclasses.dataclass(frozen=True)
class DehazePass(PostProcessPass):
    """Dehaze becomes local contrast."""

    reads = ("Dehaze",)
    writes = ("bopt:lc_enabled", "bopt:lc_strength")

    def apply(
        self, lightroom: Mapping[str, str], aftershot: Mapping[str, str]
    ) -> TransformResult:
        dehaze = lightroom.get("Dehaze")
        try:
            if not is_nonzero(dehaze):
                return TransformResult()
        except ValueError as e:
            return TransformResult.failure(
                "Dehaze", f"Could not convert Dehaze={dehaze!r} to a float: {e}"
            )
        return TransformResult(
            writes={"bopt:lc_enabled": "true", "bopt:lc_strength": str(dehaze)}
        )


# Neutral Lightroom values of features AfterShot does not have. Split toning
# hue and balance have no effect while both saturations are 0.
UNSUPPORTED_FEATURES: dict[str, dict[str, float]] = {
    "split toning": {
        "SplitToningShadowSaturation": 0,
        "SplitToningHighlightSaturation": 0,
    },
    "grain": {"GrainAmount": 0},
    "color noise reduction": {"ColorNoiseReduction": 25},
    "parametric splits": {
        "ParametricShadowSplit": 25,
        "ParametricMidtoneSplit": 50,
        "ParametricHighlightSplit": 75,
    },
}


@dataclasses.dataclass(frozen=True)
class UnsupportedFeaturesPass(PostProcessPass):
    """Warn about features that are dropped."""

    reads = tuple(
        name for fields in UNSUPPORTED_FEATURES.values() for name in fields
    )
    writes = ()

    def apply(
        self, lightroom: Mapping[str, str], aftershot: Mapping[str, str]
    ) -> TransformResult:
        diagnostics = []
        for feature, neutrals in UNSUPPORTED_FEATURES.items():
            used = [
                name
                for name, neutral in neutrals.items()
                if deviates(lightroom.get(name), neutral)
            ]
            if used:
                diagnostics.append(
                    Diagnostic.warning(
                        used[0],
                        f"This preset seems to use {feature}. This is not "
                        "supported by AfterShot and will be ignored.",
                    )
                )
        diagnostics.append(
            Diagnostic.info(
                "",
                "Lightroom has 7 adjustable colors, AfterShot has 6. "
                "Purple will be ignored if it has any settings.",
            )
        )
        return TransformResult(diagnostics=tuple(diagnostics))


DEFAULT_PASSES: tuple[PostProcessPass, ...] = (
    GrayscalePass(),
    TexturePass(),
    DehazePass(),
    UnsupportedFeaturesPass(),
)


class PostProcessConverter(ConverterProtocol):
    """Mixin for post-processing passes."""

    def run_passes(self) -> None:
        """Run the passes in order on the current AfterShot attributes."""
        for post_pass in self.passes:
            result = post_pass.apply(
                self.lightroom.attributes, self.preset.attributes
            )
            self.apply_result(
                result, post_pass.writes, owner=type(post_pass).__name__
            )
