import dataclasses
import logging

from lightroom2aftershot.core.constants import AFTERSHOT_NUM_POINTS
from lightroom2aftershot.core.tone_curve import CombinedToneCurve

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class AftershotPreset:
    """Attributes and tone curve of an AfterShot preset."""

    tone_curve: CombinedToneCurve = dataclasses.field(
        default_factory=CombinedToneCurve
    )
    attributes: dict[str, str] = dataclasses.field(default_factory=dict)
    curve_capacity: int = AFTERSHOT_NUM_POINTS

    def to_attributes(self) -> dict[str, str]:
        """All ``blay:options`` attributes: curve first, then sorted options."""
        options = self.tone_curve.to_attributes(self.curve_capacity)
        options.update(sorted(self.attributes.items()))
        return options
