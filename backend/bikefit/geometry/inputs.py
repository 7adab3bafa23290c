"""Lenient numeric parsing of caller payloads.

Payloads come from form fields and spreadsheet cells, so numbers may arrive
as strings, blanks, or carry a unit suffix ("73.5°", "100 mm"). Anything that
cannot be read as a finite number is treated as absent rather than an error.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from bikefit.geometry.types import FrameGeometry, HandlebarTarget, SaddlePosition, StemConfig

_LEADING_NUMBER = re.compile(r"^\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def parse_number(value: Any) -> Optional[float]:
    """Read the leading number of a value, None when there is none.

    Mirrors how browsers parse form input: "73.5°" reads as 73.5 and
    "abc" or "" read as absent.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if not match:
            return None
        number = float(match.group(0))
    if not math.isfinite(number):
        return None
    return number


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


@dataclass(frozen=True)
class FieldResolver:
    """Look up a value under an ordered list of candidate keys.

    The first key whose value is present and non-blank wins, so datasets
    that name the same column differently resolve to one field.
    """

    aliases: Sequence[str]

    def raw(self, record: Mapping[str, Any]) -> Any:
        for key in self.aliases:
            value = record.get(key)
            if not is_blank(value):
                return value
        return None

    def number(self, record: Mapping[str, Any]) -> Optional[float]:
        return parse_number(self.raw(record))

    def number_or(self, record: Mapping[str, Any], default: float) -> float:
        value = self.number(record)
        return default if value is None else value


REACH = FieldResolver(("reach",))
STACK = FieldResolver(("stack",))
HEAD_TUBE_ANGLE = FieldResolver(("hta", "headTubeAngle", "head_tube_angle"))
SEAT_TUBE_ANGLE = FieldResolver((
    "sta",
    "seatTubeAngle",
    "st_angle",
    "seat_tube_angle",
    "seat_tube_angle_degrees",
    "seat_tube_angle_deg",
    "seat_tube_angle_°",
))
SEAT_TUBE_LENGTH = FieldResolver(("stl", "seatTubeLength", "seat_tube_length"))
STACK_REACH_RATIO = FieldResolver((
    "sr_ratio",
    "s/r_ratio",
    "stack_reach_ratio",
    "stack/reach_ratio",
    "stack_reach",
    "stack/reach",
))

STEM_HEIGHT = FieldResolver(("stemHeight", "stem_height"))
STEM_LENGTH = FieldResolver(("stemLength", "stem_length"))
STEM_ANGLE = FieldResolver(("stemAngle", "stem_angle"))
SPACERS_HEIGHT = FieldResolver(("spacersHeight", "spacerHeight", "spacers_height"))
HEADSET_HEIGHT = FieldResolver(("headsetHeight", "headset_height"))


def stem_config_from_mapping(data: Mapping[str, Any]) -> StemConfig:
    """Build a StemConfig, filling blank or unparseable fields with defaults.

    The same rule applies to every calculation kind: an explicit 0 is kept,
    a missing value takes the StemConfig default.
    """
    defaults = StemConfig()
    return StemConfig(
        stem_height=STEM_HEIGHT.number_or(data, defaults.stem_height),
        stem_length=STEM_LENGTH.number_or(data, defaults.stem_length),
        stem_angle=STEM_ANGLE.number_or(data, defaults.stem_angle),
        spacers_height=SPACERS_HEIGHT.number_or(data, defaults.spacers_height),
        headset_height=HEADSET_HEIGHT.number_or(data, defaults.headset_height),
    )


def frame_from_mapping(data: Mapping[str, Any]) -> FrameGeometry:
    return FrameGeometry(
        reach=REACH.number(data),
        stack=STACK.number(data),
        head_tube_angle=HEAD_TUBE_ANGLE.number(data),
        seat_tube_angle=SEAT_TUBE_ANGLE.number(data),
        seat_tube_length=SEAT_TUBE_LENGTH.number(data),
    )


def saddle_from_mapping(data: Mapping[str, Any]) -> SaddlePosition:
    return SaddlePosition(
        saddle_x=parse_number(data.get("saddleX")),
        saddle_y=parse_number(data.get("saddleY")),
    )


def target_from_mapping(data: Mapping[str, Any]) -> HandlebarTarget:
    return HandlebarTarget(
        target_handlebar_x=parse_number(data.get("targetHandlebarX")),
        target_handlebar_y=parse_number(data.get("targetHandlebarY")),
        handlebar_reach_used=parse_number(data.get("handlebarReachUsed")),
    )
