"""Stem vector composition.

Chains headset, spacer stack, half the stem clamp height and the stem body
into one displacement from the head tube top to the handlebar clamp centre.
"""

import logging

from shapely.geometry import LineString

from bikefit.geometry.primitives import project, round_half_up
from bikefit.geometry.types import StemComparison, StemConfig, StemVector

logger = logging.getLogger(__name__)


class StemVectorResolver:
    """Resolve where a stem puts the handlebar relative to the head tube top."""

    def steerer_angle(self, head_tube_angle: float) -> float:
        """Direction of the steerer axis, pointing up and back from the frame."""
        return 180 - head_tube_angle

    def stem_body_angle(self, head_tube_angle: float, stem_angle: float) -> float:
        """Stem body direction: perpendicular to the steerer, tilted by the stem's rise."""
        return 90 - head_tube_angle + stem_angle

    def resolve(self, head_tube_angle: float, stem: StemConfig) -> StemVector:
        """Compose the cockpit offsets into a single displacement vector.

        Args:
            head_tube_angle: Head tube angle in degrees from horizontal
            stem: Stem, spacer and headset dimensions

        Returns:
            StemVector with the clamp displacement and the stem centre point
        """
        center_x, center_y = project(
            0.0, 0.0, stem.pivot_offset, self.steerer_angle(head_tube_angle)
        )
        clamp_x, clamp_y = project(
            center_x,
            center_y,
            stem.stem_length,
            self.stem_body_angle(head_tube_angle, stem.stem_angle),
        )
        return StemVector(
            x=clamp_x,
            y=clamp_y,
            stem_center_x=center_x,
            stem_center_y=center_y,
        )

    def path(
        self,
        head_tube_angle: float,
        stem: StemConfig,
        origin: tuple[float, float] = (0.0, 0.0),
    ) -> LineString:
        """Polyline head tube top -> spacer stack top -> stem centre -> bar clamp."""
        steerer = self.steerer_angle(head_tube_angle)
        x0, y0 = origin
        x1, y1 = project(x0, y0, stem.headset_height + stem.spacers_height, steerer)
        x2, y2 = project(x1, y1, stem.stem_height / 2, steerer)
        x3, y3 = project(
            x2,
            y2,
            stem.stem_length,
            self.stem_body_angle(head_tube_angle, stem.stem_angle),
        )
        return LineString([(x0, y0), (x1, y1), (x2, y2), (x3, y3)])

    def compare(
        self,
        reference: StemVector,
        candidate: StemVector,
    ) -> StemComparison:
        """Difference of a candidate stem against an explicit reference stem.

        Both vectors are rounded to whole millimetres before subtracting, so
        the reported difference matches the displayed run/rise values.
        """
        return StemComparison(
            diff_x=round_half_up(candidate.x) - round_half_up(reference.x),
            diff_y=round_half_up(candidate.y) - round_half_up(reference.y),
        )

    def compare_many(
        self,
        reference: tuple[float, StemConfig],
        candidates: list[tuple[float, StemConfig]],
    ) -> list[StemComparison]:
        """Compare (head_tube_angle, stem) setups against a reference setup."""
        base = self.resolve(*reference)
        logger.debug("Comparing %d stems against reference %s", len(candidates), reference)
        return [self.compare(base, self.resolve(*candidate)) for candidate in candidates]
