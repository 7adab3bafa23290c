"""Type definitions for the geometry engine.

Contains the value records passed into and returned from the resolvers.
All lengths are millimetres, all angles are degrees from horizontal.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

SENTINEL = "--"

# A published measurement: a number, or the sentinel when it cannot be computed.
Measurement = Union[int, float, str]

SADDLE_X_MIN = 100.0
SADDLE_X_MAX = 300.0
SADDLE_Y_MIN = 425.0
SADDLE_Y_MAX = 900.0

# Used by drawing code when a frame has no seat tube angle. The numeric
# resolvers never substitute it.
DISPLAY_FALLBACK_STA = 73.0


@dataclass(frozen=True)
class FrameGeometry:
    """Frame measurements relative to the bottom bracket."""

    reach: Optional[float] = None
    stack: Optional[float] = None
    head_tube_angle: Optional[float] = None
    seat_tube_angle: Optional[float] = None
    seat_tube_length: Optional[float] = None

    @property
    def has_handlebar_geometry(self) -> bool:
        """Reach, stack and head tube angle are all usable."""
        return (
            _positive(self.reach)
            and _positive(self.stack)
            and _angle(self.head_tube_angle)
        )

    @property
    def has_seat_tube_angle(self) -> bool:
        return _angle(self.seat_tube_angle)

    @property
    def has_seat_tube_length(self) -> bool:
        return _positive(self.seat_tube_length)


@dataclass(frozen=True)
class StemConfig:
    """Cockpit stack above the head tube, defaults match a stock road setup."""

    stem_height: float = 40.0
    stem_length: float = 100.0
    stem_angle: float = -6.0
    spacers_height: float = 20.0
    headset_height: float = 10.0

    @property
    def pivot_offset(self) -> float:
        """Distance along the steerer from head tube top to stem clamp centre."""
        return self.headset_height + self.spacers_height + self.stem_height / 2


@dataclass(frozen=True)
class SaddlePosition:
    """Saddle rail centre (SRC) measured from the bottom bracket.

    X is horizontal setback behind the BB, Y is height above it.
    """

    saddle_x: Optional[float] = None
    saddle_y: Optional[float] = None

    @property
    def is_valid(self) -> bool:
        if self.saddle_x is None or self.saddle_y is None:
            return False
        return (
            SADDLE_X_MIN <= self.saddle_x <= SADDLE_X_MAX
            and SADDLE_Y_MIN <= self.saddle_y <= SADDLE_Y_MAX
        )


@dataclass(frozen=True)
class HandlebarTarget:
    """Fit targets used to compute the handlebar reach adjustment."""

    target_handlebar_x: Optional[float] = None
    target_handlebar_y: Optional[float] = None
    handlebar_reach_used: Optional[float] = None


@dataclass(frozen=True)
class StemVector:
    """Displacement from head tube top to the handlebar clamp centre."""

    x: float
    y: float
    stem_center_x: float
    stem_center_y: float

    @property
    def magnitude(self) -> float:
        return (self.x * self.x + self.y * self.y) ** 0.5


@dataclass(frozen=True)
class HandlebarPosition:
    """Handlebar clamp position relative to the BB, plus target deltas."""

    handlebar_x: Measurement = SENTINEL
    handlebar_y: Measurement = SENTINEL
    bar_reach_needed: Measurement = SENTINEL
    handlebar_x_diff: Optional[int] = None
    handlebar_y_diff: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "handlebarX": self.handlebar_x,
            "handlebarY": self.handlebar_y,
            "barReachNeeded": self.bar_reach_needed,
            "handlebarXDiff": _signed(self.handlebar_x_diff),
            "handlebarYDiff": _signed(self.handlebar_y_diff),
        }


@dataclass(frozen=True)
class SaddleMetrics:
    """Measurements derived from the saddle position."""

    effective_sta: Measurement = SENTINEL
    setback_vs_sta: Measurement = SENTINEL
    bb_to_rail: Measurement = SENTINEL
    bb_to_src: Measurement = SENTINEL
    exposed_seatpost: Measurement = SENTINEL

    def to_dict(self) -> dict[str, Any]:
        return {
            "effectiveSTA": self.effective_sta,
            "setbackVsSTA": self.setback_vs_sta,
            "bbToRail": self.bb_to_rail,
            "bbToSRC": self.bb_to_src,
            "exposedSeatpost": self.exposed_seatpost,
        }


@dataclass(frozen=True)
class PositionResult:
    """Combined output of the position simulator for one bike."""

    handlebar: HandlebarPosition
    saddle: SaddleMetrics
    frame_geometry_valid: bool = False

    def to_dict(self) -> dict[str, Any]:
        data = self.handlebar.to_dict()
        data.update(self.saddle.to_dict())
        data["frameGeometryValid"] = self.frame_geometry_valid
        return data


@dataclass(frozen=True)
class FrameFromHandlebar:
    """Frame reach/stack implied by a handlebar position and cockpit."""

    frame_reach: Measurement = SENTINEL
    frame_stack: Measurement = SENTINEL

    def to_dict(self) -> dict[str, Any]:
        return {"frameReach": self.frame_reach, "frameStack": self.frame_stack}


@dataclass(frozen=True)
class StemComparison:
    """Rounded run/rise difference of one stem against a reference stem."""

    diff_x: int
    diff_y: int

    @property
    def x_label(self) -> str:
        if self.diff_x > 0:
            return "longer"
        if self.diff_x < 0:
            return "shorter"
        return ""

    @property
    def y_label(self) -> str:
        if self.diff_y > 0:
            return "higher"
        if self.diff_y < 0:
            return "lower"
        return ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "diffX": self.diff_x,
            "diffY": self.diff_y,
            "xLabel": self.x_label,
            "yLabel": self.y_label,
        }


@dataclass(frozen=True)
class StemResult:
    """Run and rise of a stem setup, optionally compared to a reference."""

    effective_reach: float
    effective_stack: float
    comparison: Optional[StemComparison] = None
    path: list[tuple[float, float]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "effectiveReach": self.effective_reach,
            "effectiveStack": self.effective_stack,
            "path": [list(point) for point in self.path],
        }
        if self.comparison is not None:
            data["comparison"] = self.comparison.to_dict()
        return data


def _positive(value: Optional[float]) -> bool:
    return value is not None and value > 0


def _angle(value: Optional[float]) -> bool:
    return value is not None and 0 < value < 180


def _signed(diff: Optional[int]) -> str:
    if diff is None:
        return ""
    return f"+{diff}" if diff > 0 else str(diff)
