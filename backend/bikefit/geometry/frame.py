"""Frame-relative handlebar resolution.

Places the stem vector on top of the head tube top point (reach, stack) to
get the handlebar clamp relative to the bottom bracket, and inverts that to
recover frame reach/stack from a measured handlebar position.
"""

import logging
from typing import Optional

from bikefit.geometry.primitives import round_half_up
from bikefit.geometry.stem import StemVectorResolver
from bikefit.geometry.types import (
    SENTINEL,
    FrameFromHandlebar,
    FrameGeometry,
    HandlebarPosition,
    HandlebarTarget,
    StemConfig,
)

logger = logging.getLogger(__name__)


class FrameGeometryResolver:
    """Resolve handlebar coordinates for a frame and cockpit."""

    REACH_RANGE = (300.0, 500.0)
    STACK_RANGE = (460.0, 750.0)
    HTA_RANGE = (60.0, 75.0)
    STA_RANGE = (65.0, 85.0)

    def __init__(self, stem_resolver: Optional[StemVectorResolver] = None):
        self.stem_resolver = stem_resolver or StemVectorResolver()

    def handlebar_coordinates(
        self,
        frame: FrameGeometry,
        stem: StemConfig,
    ) -> Optional[tuple[float, float]]:
        """Unrounded handlebar (x, y), or None without reach, stack and HTA."""
        if not frame.has_handlebar_geometry:
            return None
        vector = self.stem_resolver.resolve(frame.head_tube_angle, stem)
        return frame.reach + vector.x, frame.stack + vector.y

    def handlebar_position(
        self,
        frame: FrameGeometry,
        stem: StemConfig,
        target: Optional[HandlebarTarget] = None,
    ) -> HandlebarPosition:
        """Compute the handlebar position and its deltas against a fit target.

        Args:
            frame: Frame geometry; reach, stack and HTA are required
            stem: Cockpit configuration
            target: Optional target handlebar position and bar reach in use

        Returns:
            HandlebarPosition with whole-millimetre coordinates and diffs, or
            sentinels when the frame is missing required geometry. Bar reach
            needed keeps the fractional part of the caller inputs.
        """
        coordinates = self.handlebar_coordinates(frame, stem)
        if coordinates is None:
            logger.debug("Frame lacks reach/stack/HTA, handlebar left unresolved")
            return HandlebarPosition()

        handlebar_x = round_half_up(coordinates[0])
        handlebar_y = round_half_up(coordinates[1])
        target = target or HandlebarTarget()

        bar_reach_needed = SENTINEL
        if target.target_handlebar_x is not None and target.handlebar_reach_used is not None:
            bar_reach_needed = (
                target.handlebar_reach_used + (target.target_handlebar_x - handlebar_x)
            )

        x_diff = None
        if target.target_handlebar_x is not None:
            x_diff = round_half_up(handlebar_x - target.target_handlebar_x)

        y_diff = None
        if target.target_handlebar_y is not None:
            y_diff = round_half_up(handlebar_y - target.target_handlebar_y)

        return HandlebarPosition(
            handlebar_x=handlebar_x,
            handlebar_y=handlebar_y,
            bar_reach_needed=bar_reach_needed,
            handlebar_x_diff=x_diff,
            handlebar_y_diff=y_diff,
        )

    def frame_from_handlebar(
        self,
        handlebar_x: Optional[float],
        handlebar_y: Optional[float],
        head_tube_angle: Optional[float],
        stem: StemConfig,
    ) -> FrameFromHandlebar:
        """Recover frame reach/stack from a handlebar position and cockpit."""
        if not handlebar_x or not handlebar_y:
            return FrameFromHandlebar()
        if head_tube_angle is None or not 0 < head_tube_angle < 180:
            return FrameFromHandlebar()

        vector = self.stem_resolver.resolve(head_tube_angle, stem)
        return FrameFromHandlebar(
            frame_reach=round_half_up(handlebar_x - vector.x),
            frame_stack=round_half_up(handlebar_y - vector.y),
        )

    def is_frame_geometry_valid(self, frame: FrameGeometry) -> bool:
        """Range check for plausible road/gravel frame geometry."""
        if not frame.has_handlebar_geometry:
            return False
        checks = [
            _within(frame.reach, self.REACH_RANGE),
            _within(frame.stack, self.STACK_RANGE),
            _within(frame.head_tube_angle, self.HTA_RANGE),
        ]
        if frame.seat_tube_angle:
            checks.append(_within(frame.seat_tube_angle, self.STA_RANGE))
        return all(checks)


def _within(value: float, bounds: tuple[float, float]) -> bool:
    return bounds[0] <= value <= bounds[1]
