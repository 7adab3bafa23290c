"""Rank bikes by how closely their reach/stack match a target fit."""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Union

from bikefit.config import get_settings
from bikefit.geometry.inputs import parse_number
from bikefit.search.records import BikeRecord

logger = logging.getLogger(__name__)

RecordLike = Union[BikeRecord, Mapping[str, Any]]

TEXT_COLUMNS = {"brand", "model", "size", "style", "material"}


@dataclass(frozen=True)
class SearchCriteria:
    """Target fit window plus categorical and numeric-range filters."""

    reach_target: float
    stack_target: float
    reach_range: float = 5.0
    stack_range: float = 5.0
    brand_filter: frozenset[str] = frozenset()
    material_filter: frozenset[str] = frozenset()
    style_filter: Optional[str] = None
    sr_ratio_min: float = -math.inf
    sr_ratio_max: float = math.inf
    sta_min: float = -math.inf
    sta_max: float = math.inf


@dataclass(frozen=True)
class BikeMatch:
    """A bike inside the fit window with its distance from the target."""

    record: BikeRecord
    reach_diff: float
    stack_diff: float
    total_diff: float

    def to_dict(self) -> dict[str, Any]:
        data = dict(self.record.raw)
        data.update({
            "reachDiff": self.reach_diff,
            "stackDiff": self.stack_diff,
            "totalDiff": self.total_diff,
        })
        return data


@dataclass
class SearchResult:
    """Closest matches, capped for display, with the uncapped match count."""

    matches: list[BikeMatch] = field(default_factory=list)
    total_matches: int = 0
    warnings: list[str] = field(default_factory=list)

    @property
    def is_truncated(self) -> bool:
        return self.total_matches > len(self.matches)

    def to_dict(self) -> dict[str, Any]:
        return {
            "matches": [match.to_dict() for match in self.matches],
            "totalMatches": self.total_matches,
            "displayed": len(self.matches),
            "warnings": self.warnings,
        }


class BikeSearchFilter:
    """Filter, score, sort and cap a bike dataset against search criteria.

    Pipeline order is fixed:
    1. Filter: reach/stack windows, brand/material/style, S/R ratio and STA ranges
    2. Augment: reach_diff, stack_diff and total_diff = |reach_diff| + |stack_diff|
    3. Sort: ascending total_diff, ties kept in dataset order
    4. Cap: keep the first `result_limit`, report the uncapped count
    """

    REACH_BOUNDS = (300.0, 550.0)
    STACK_BOUNDS = (400.0, 700.0)

    def __init__(self, result_limit: Optional[int] = None):
        self.result_limit = result_limit or get_settings().search_result_limit

    def search(
        self,
        records: Iterable[RecordLike],
        criteria: SearchCriteria,
    ) -> SearchResult:
        """Run the full pipeline.

        Args:
            records: BikeRecords or raw string-keyed rows
            criteria: Target fit and filters

        Returns:
            SearchResult with the capped match list and total match count
        """
        matches = [
            self._augment(record, criteria)
            for record in (_as_record(r) for r in records)
            if self.matches(record, criteria)
        ]
        matches.sort(key=lambda match: match.total_diff)

        logger.debug(
            "Search reach=%s stack=%s matched %d bikes",
            criteria.reach_target,
            criteria.stack_target,
            len(matches),
        )
        return SearchResult(
            matches=matches[: self.result_limit],
            total_matches=len(matches),
            warnings=self.validate_criteria(criteria),
        )

    def matches(self, record: BikeRecord, criteria: SearchCriteria) -> bool:
        """Whether a record passes every filter predicate."""
        if record.reach is None or record.stack is None:
            return False
        if abs(record.reach - criteria.reach_target) > criteria.reach_range:
            return False
        if abs(record.stack - criteria.stack_target) > criteria.stack_range:
            return False
        if criteria.brand_filter and record.brand not in criteria.brand_filter:
            return False
        if criteria.material_filter and record.material not in criteria.material_filter:
            return False
        if criteria.style_filter and record.style != criteria.style_filter:
            return False
        if record.sr_ratio is not None and not (
            criteria.sr_ratio_min <= record.sr_ratio <= criteria.sr_ratio_max
        ):
            return False
        if record.sta is not None and not (criteria.sta_min <= record.sta <= criteria.sta_max):
            return False
        return True

    def validate_criteria(self, criteria: SearchCriteria) -> list[str]:
        """Non-fatal warnings about implausible search targets."""
        warnings = []
        if not _within(criteria.reach_target, self.REACH_BOUNDS):
            warnings.append(
                f"reach target {criteria.reach_target} outside typical range "
                f"{self.REACH_BOUNDS[0]:.0f}-{self.REACH_BOUNDS[1]:.0f}"
            )
        if not _within(criteria.stack_target, self.STACK_BOUNDS):
            warnings.append(
                f"stack target {criteria.stack_target} outside typical range "
                f"{self.STACK_BOUNDS[0]:.0f}-{self.STACK_BOUNDS[1]:.0f}"
            )
        if criteria.reach_range < 0 or criteria.stack_range < 0:
            warnings.append("range values should not be negative")
        return warnings

    def sort_matches(
        self,
        matches: list[BikeMatch],
        column: str,
        descending: bool = False,
    ) -> list[BikeMatch]:
        """Re-sort matches by a display column, keeping ties in input order."""
        if column in TEXT_COLUMNS:
            key = lambda match: (getattr(match.record, column) or "").lower()  # noqa: E731
        else:
            key = lambda match: _numeric_column(match, column)  # noqa: E731
        return sorted(matches, key=key, reverse=descending)

    def dataset_bounds(self, records: Iterable[RecordLike]) -> dict[str, Optional[dict[str, Any]]]:
        """Slider bounds over the parseable values of a dataset."""
        bikes = [_as_record(r) for r in records]
        reach = [b.reach for b in bikes if b.reach is not None]
        stack = [b.stack for b in bikes if b.stack is not None]
        sr_ratio = [b.sr_ratio for b in bikes if b.sr_ratio is not None]
        sta = [b.sta for b in bikes if b.sta is not None]

        return {
            "reach": _bounds(reach, math.floor(min(reach)), math.ceil(max(reach))) if reach else None,
            "stack": _bounds(stack, math.floor(min(stack)), math.ceil(max(stack))) if stack else None,
            "srRatio": (
                _bounds(
                    sr_ratio,
                    math.floor(min(sr_ratio) * 100) / 100,
                    math.ceil(max(sr_ratio) * 100) / 100,
                )
                if sr_ratio
                else None
            ),
            "sta": _bounds(sta, min(sta), max(sta)) if sta else None,
        }

    def filter_options(self, records: Iterable[RecordLike]) -> dict[str, list[str]]:
        """Distinct brands, materials and styles available for filtering."""
        bikes = [_as_record(r) for r in records]
        return {
            "brands": sorted({b.brand for b in bikes if b.brand}),
            "materials": sorted({b.material for b in bikes if b.material}),
            "styles": sorted({b.style for b in bikes if b.style}),
        }

    def _augment(self, record: BikeRecord, criteria: SearchCriteria) -> BikeMatch:
        reach_diff = record.reach - criteria.reach_target
        stack_diff = record.stack - criteria.stack_target
        return BikeMatch(
            record=record,
            reach_diff=reach_diff,
            stack_diff=stack_diff,
            total_diff=abs(reach_diff) + abs(stack_diff),
        )


def _as_record(record: RecordLike) -> BikeRecord:
    if isinstance(record, BikeRecord):
        return record
    return BikeRecord.from_mapping(record)


def _numeric_column(match: BikeMatch, column: str) -> float:
    derived = {
        "reachDiff": match.reach_diff,
        "stackDiff": match.stack_diff,
        "totalDiff": match.total_diff,
        "reach": match.record.reach,
        "stack": match.record.stack,
        "sr_ratio": match.record.sr_ratio,
        "sta": match.record.sta,
    }
    if column in derived:
        value = derived[column]
    else:
        value = parse_number(match.record.raw.get(column))
    return 0.0 if value is None else value


def _bounds(values: list[float], low: float, high: float) -> dict[str, Any]:
    return {"min": low, "max": high, "count": len(values)}


def _within(value: float, bounds: tuple[float, float]) -> bool:
    return bounds[0] <= value <= bounds[1]
