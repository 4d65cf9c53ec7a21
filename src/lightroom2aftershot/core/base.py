from typing import TYPE_CHECKING, Mapping, Protocol, Sequence

from lightroom2aftershot.core.aftershot import AftershotPreset
from lightroom2aftershot.core.diagnostics import Diagnostic, TransformResult
from lightroom2aftershot.core.lightroom import LightroomPreset

if TYPE_CHECKING:
    from lightroom2aftershot.core.mapping import Transform
    from lightroom2aftershot.core.passes import PostProcessPass


class ConverterProtocol(Protocol):
    """Converter state protocol."""

    lightroom: LightroomPreset
    preset: AftershotPreset
    diagnostics: list[Diagnostic]

    # Conversion rules.
    mappers: Mapping[str, "Transform"]
    passes: Sequence["PostProcessPass"]

    # Phases
    def seed(self) -> None: ...
    def map_attributes(self) -> None: ...
    def run_passes(self) -> None: ...

    # Utilities
    def report(self, diagnostic: Diagnostic) -> None: ...
    def apply_result(
        self, result: TransformResult, allowed: Sequence[str], owner: str
    ) -> None: ...
