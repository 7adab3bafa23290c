"""Bike dataset records.

Datasets arrive as spreadsheet exports whose column names drift between
versions, so records wrap the raw row and resolve fields through aliases.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

from bikefit.geometry.inputs import (
    SEAT_TUBE_ANGLE,
    STACK_REACH_RATIO,
    parse_number,
)

MATERIAL_HEADER_ALIASES = {"frame_material", "material_type", "frame_material_type"}

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class BikeRecord:
    """One frame size from the bike dataset."""

    brand: str = ""
    model: str = ""
    size: str = ""
    reach: Optional[float] = None
    stack: Optional[float] = None
    style: Optional[str] = None
    material: Optional[str] = None
    sr_ratio: Optional[float] = None
    sta: Optional[float] = None
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "BikeRecord":
        return cls(
            brand=_text(row.get("brand")) or "",
            model=_text(row.get("model")) or "",
            size=_text(row.get("size")) or "",
            reach=parse_number(row.get("reach")),
            stack=parse_number(row.get("stack")),
            style=_text(row.get("style")),
            material=_text(row.get("material")),
            sr_ratio=STACK_REACH_RATIO.number(row),
            sta=SEAT_TUBE_ANGLE.number(row),
            raw=dict(row),
        )


def normalize_header(header: str) -> str:
    """Lower-case a column header and join words with underscores."""
    key = _WHITESPACE.sub("_", str(header).strip().lower())
    if key in MATERIAL_HEADER_ALIASES:
        return "material"
    return key


def records_from_rows(values: Sequence[Sequence[Any]]) -> list[dict[str, Any]]:
    """Turn a header row plus data rows into string-keyed records.

    Short rows leave trailing columns unset.
    """
    if not values or len(values) < 2:
        return []

    headers = [normalize_header(h) for h in values[0]]
    records = []
    for row in values[1:]:
        record: dict[str, Any] = {}
        for index, key in enumerate(headers):
            record[key] = row[index] if index < len(row) else None
        records.append(record)
    return records


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
