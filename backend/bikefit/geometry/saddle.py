"""Saddle-relative measurements."""

import logging
import math
from typing import Optional

from bikefit.geometry.primitives import (
    angle_from_vertical,
    distance,
    round_half_up,
    round_to_tenth,
    to_radians,
)
from bikefit.geometry.types import SENTINEL, FrameGeometry, SaddleMetrics, SaddlePosition

logger = logging.getLogger(__name__)


class SaddleGeometryResolver:
    """Derive seat tube and seatpost measurements from a saddle position.

    Every output depends on the saddle being inside the valid window; an
    out-of-range or unset saddle yields sentinels for all five fields.
    Seat tube angle dependent fields are sentinels when the frame has no
    usable STA, and exposed seatpost additionally needs the seat tube length.
    """

    def is_saddle_position_valid(self, saddle: SaddlePosition) -> bool:
        return saddle.is_valid

    def effective_sta(self, saddle: SaddlePosition) -> float:
        return round_to_tenth(angle_from_vertical(saddle.saddle_x, saddle.saddle_y))

    def setback_vs_sta(self, saddle: SaddlePosition, sta: float) -> int:
        """Horizontal gap between the seat tube line and SRC at saddle height."""
        seat_tube_x = saddle.saddle_y * math.tan(to_radians(90 - sta))
        return round_half_up(seat_tube_x - saddle.saddle_x)

    def bb_to_rail(self, saddle: SaddlePosition, sta: float) -> int:
        """Seat tube line length from the BB up to saddle height."""
        return round_half_up(saddle.saddle_y / math.sin(to_radians(180 - sta)))

    def bb_to_src(self, saddle: SaddlePosition) -> int:
        return round_half_up(distance(saddle.saddle_x, saddle.saddle_y))

    def resolve(
        self,
        saddle: SaddlePosition,
        seat_tube_angle: Optional[float] = None,
        seat_tube_length: Optional[float] = None,
    ) -> SaddleMetrics:
        """Compute all saddle outputs together.

        Args:
            saddle: Saddle rail centre position
            seat_tube_angle: Frame STA in degrees, optional
            seat_tube_length: Frame seat tube length in mm, optional

        Returns:
            SaddleMetrics, with sentinels for anything not computable
        """
        if not self.is_saddle_position_valid(saddle):
            logger.debug("Saddle position %s outside valid window", saddle)
            return SaddleMetrics()

        frame = FrameGeometry(
            seat_tube_angle=seat_tube_angle,
            seat_tube_length=seat_tube_length,
        )

        setback = SENTINEL
        bb_to_rail = SENTINEL
        exposed = SENTINEL
        if frame.has_seat_tube_angle:
            setback = self.setback_vs_sta(saddle, seat_tube_angle)
            bb_to_rail = self.bb_to_rail(saddle, seat_tube_angle)
            if frame.has_seat_tube_length:
                exposed = round_half_up(bb_to_rail - seat_tube_length)

        return SaddleMetrics(
            effective_sta=self.effective_sta(saddle),
            setback_vs_sta=setback,
            bb_to_rail=bb_to_rail,
            bb_to_src=self.bb_to_src(saddle),
            exposed_seatpost=exposed,
        )

    def resolve_for_frame(self, saddle: SaddlePosition, frame: FrameGeometry) -> SaddleMetrics:
        return self.resolve(saddle, frame.seat_tube_angle, frame.seat_tube_length)
