"""Calculation dispatch for the fit tools.

Each fit tool posts a `calculationType` plus a loosely-typed `data` payload.
GeometryCalculator parses the payload with the lenient rules in
`bikefit.geometry.inputs`, runs the matching resolvers and returns a plain
dictionary with the wire field names the tools display.
"""

import logging
from typing import Any, Callable, Mapping, Optional

from bikefit.config import get_settings
from bikefit.core.exceptions import (
    InvalidPayloadError,
    TooManyBikesError,
    UnknownCalculationTypeError,
)
from bikefit.geometry.frame import FrameGeometryResolver
from bikefit.geometry.inputs import (
    HEAD_TUBE_ANGLE,
    frame_from_mapping,
    parse_number,
    saddle_from_mapping,
    stem_config_from_mapping,
    target_from_mapping,
)
from bikefit.geometry.primitives import round_half_up
from bikefit.geometry.saddle import SaddleGeometryResolver
from bikefit.geometry.stem import StemVectorResolver
from bikefit.geometry.types import (
    SENTINEL,
    PositionResult,
    SaddleMetrics,
    SaddlePosition,
    StemResult,
)

logger = logging.getLogger(__name__)


class GeometryCalculator:
    """Stateless entry point for every calculation kind."""

    POSITION_SIMULATOR = "position-simulator"
    SEATPOST = "seatpost"
    STACK_REACH = "stack-reach"
    STEM = "stem"
    XY_POSITION = "xy-position"

    def __init__(self, max_bikes_per_request: Optional[int] = None):
        self.stem_resolver = StemVectorResolver()
        self.frame_resolver = FrameGeometryResolver(self.stem_resolver)
        self.saddle_resolver = SaddleGeometryResolver()
        self.max_bikes_per_request = (
            max_bikes_per_request or get_settings().max_bikes_per_request
        )
        self._handlers: dict[str, Callable[[Mapping[str, Any]], dict[str, Any]]] = {
            self.POSITION_SIMULATOR: self.calculate_position_simulator,
            self.SEATPOST: self.calculate_seatpost,
            self.STACK_REACH: self.calculate_stack_reach,
            self.STEM: self.calculate_stem,
            self.XY_POSITION: self.calculate_xy_position,
        }

    @property
    def calculation_types(self) -> list[str]:
        return list(self._handlers)

    def calculate(self, calculation_type: str, data: Any) -> dict[str, Any]:
        """Run one calculation.

        Args:
            calculation_type: One of `calculation_types`
            data: Payload mapping for that kind

        Returns:
            Result dictionary keyed by wire field names

        Raises:
            UnknownCalculationTypeError: calculation_type is not supported
            InvalidPayloadError: data is not a mapping
        """
        handler = self._handlers.get(calculation_type)
        if handler is None:
            logger.warning("Rejected unknown calculation type %r", calculation_type)
            raise UnknownCalculationTypeError(calculation_type)

        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise InvalidPayloadError("data must be an object")

        logger.debug("Dispatching %s calculation", calculation_type)
        return handler(data)

    def calculate_position_simulator(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Handlebar position, bar reach needed and saddle metrics for one bike."""
        bike = data.get("bike") or {}
        if not isinstance(bike, Mapping):
            raise InvalidPayloadError("bike must be an object")

        frame = frame_from_mapping(bike)
        stem = stem_config_from_mapping(bike)
        handlebar = self.frame_resolver.handlebar_position(
            frame, stem, target_from_mapping(data)
        )

        saddle = saddle_from_mapping(data)
        # Saddle outputs need the caller to confirm the saddle; the window check still applies
        if not data.get("isSaddleValid"):
            saddle_metrics = SaddleMetrics()
        else:
            saddle_metrics = self.saddle_resolver.resolve_for_frame(saddle, frame)

        return PositionResult(
            handlebar=handlebar,
            saddle=saddle_metrics,
            frame_geometry_valid=self.frame_resolver.is_frame_geometry_valid(frame),
        ).to_dict()

    def calculate_seatpost(self, data: Mapping[str, Any]) -> dict[str, Any]:
        saddle = saddle_from_mapping(data)
        metrics = self.saddle_resolver.resolve(
            saddle,
            parse_number(data.get("seatTubeAngle")),
            parse_number(data.get("seatTubeLength")),
        )
        return metrics.to_dict()

    def calculate_stack_reach(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Frame reach/stack that puts the bars at a given handlebar X/Y."""
        result = self.frame_resolver.frame_from_handlebar(
            parse_number(data.get("handlebarX")),
            parse_number(data.get("handlebarY")),
            HEAD_TUBE_ANGLE.number(data),
            stem_config_from_mapping(data),
        )
        return result.to_dict()

    def calculate_stem(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Run and rise of a stem setup, optionally against a reference setup.

        The pivot includes the headset height (default 10mm) like every other
        kind, so results match the position simulator for the same cockpit.
        """
        hta = HEAD_TUBE_ANGLE.number(data)
        if hta is None or not 0 < hta < 180:
            return {"effectiveReach": SENTINEL, "effectiveStack": SENTINEL, "path": []}

        stem = stem_config_from_mapping(data)
        vector = self.stem_resolver.resolve(hta, stem)

        comparison = None
        reference = data.get("reference")
        if isinstance(reference, Mapping):
            reference_hta = HEAD_TUBE_ANGLE.number(reference)
            if reference_hta is not None and 0 < reference_hta < 180:
                base = self.stem_resolver.resolve(
                    reference_hta, stem_config_from_mapping(reference)
                )
                comparison = self.stem_resolver.compare(base, vector)

        return StemResult(
            effective_reach=vector.x,
            effective_stack=vector.y,
            comparison=comparison,
            path=list(self.stem_resolver.path(hta, stem).coords),
        ).to_dict()

    def calculate_xy_position(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Batch handlebar/saddle comparison of several bikes against one fit."""
        bikes = data.get("bikes")
        if not isinstance(bikes, list):
            raise InvalidPayloadError("bikes must be an array")
        if len(bikes) > self.max_bikes_per_request:
            raise TooManyBikesError(len(bikes), self.max_bikes_per_request)

        target_reach = parse_number(data.get("targetReach"))
        target_stack = parse_number(data.get("targetStack"))
        saddle = SaddlePosition(
            saddle_x=parse_number(data.get("targetSaddleX")),
            saddle_y=parse_number(data.get("targetSaddleY")),
        )

        results = []
        for index, bike in enumerate(bikes):
            if not isinstance(bike, Mapping):
                raise InvalidPayloadError(f"bikes[{index}] must be an object")
            results.append(self._xy_position_row(bike, target_reach, target_stack, saddle))

        logger.debug("Resolved xy-position for %d bikes", len(results))
        return {"results": results}

    def _xy_position_row(
        self,
        bike: Mapping[str, Any],
        target_reach: Optional[float],
        target_stack: Optional[float],
        saddle: SaddlePosition,
    ) -> dict[str, Any]:
        frame = frame_from_mapping(bike)
        stem = stem_config_from_mapping(bike)
        row = dict(bike)

        coordinates = self.frame_resolver.handlebar_coordinates(frame, stem)
        if coordinates is None:
            row.update({
                "handlebarX": SENTINEL,
                "handlebarY": SENTINEL,
                "reachDiff": SENTINEL,
                "stackDiff": SENTINEL,
                "totalDiff": SENTINEL,
                "path": [],
            })
        else:
            handlebar_x, handlebar_y = coordinates
            reach_diff = handlebar_x - target_reach if target_reach is not None else None
            stack_diff = handlebar_y - target_stack if target_stack is not None else None
            total_diff = SENTINEL
            if reach_diff is not None and stack_diff is not None:
                total_diff = abs(reach_diff) + abs(stack_diff)
            path = self.stem_resolver.path(
                frame.head_tube_angle, stem, origin=(frame.reach, frame.stack)
            )
            row.update({
                "handlebarX": round_half_up(handlebar_x),
                "handlebarY": round_half_up(handlebar_y),
                "reachDiff": SENTINEL if reach_diff is None else round_half_up(reach_diff),
                "stackDiff": SENTINEL if stack_diff is None else round_half_up(stack_diff),
                "totalDiff": total_diff,
                "path": [list(point) for point in path.coords],
            })

        row.update(self.saddle_resolver.resolve_for_frame(saddle, frame).to_dict())
        return row
