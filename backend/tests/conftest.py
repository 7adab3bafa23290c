"""Pytest fixtures for geometry and search testing."""

from typing import Any

import pytest

from bikefit.geometry import (
    FrameGeometry,
    FrameGeometryResolver,
    GeometryCalculator,
    SaddleGeometryResolver,
    StemConfig,
    StemVectorResolver,
)
from bikefit.search import BikeSearchFilter


@pytest.fixture
def stem_resolver() -> StemVectorResolver:
    return StemVectorResolver()


@pytest.fixture
def frame_resolver() -> FrameGeometryResolver:
    return FrameGeometryResolver()


@pytest.fixture
def saddle_resolver() -> SaddleGeometryResolver:
    return SaddleGeometryResolver()


@pytest.fixture
def calculator() -> GeometryCalculator:
    return GeometryCalculator(max_bikes_per_request=20)


@pytest.fixture
def search_filter() -> BikeSearchFilter:
    return BikeSearchFilter(result_limit=100)


@pytest.fixture
def default_stem() -> StemConfig:
    """40mm stem, 100mm long at -6°, 20mm spacers, 10mm headset cap."""
    return StemConfig()


@pytest.fixture
def endurance_frame() -> FrameGeometry:
    """Size 54 endurance frame: 380 reach, 560 stack, 73° head and seat tube."""
    return FrameGeometry(
        reach=380,
        stack=560,
        head_tube_angle=73,
        seat_tube_angle=73,
        seat_tube_length=500,
    )


@pytest.fixture
def endurance_bike_payload() -> dict[str, Any]:
    """The endurance frame as the position simulator posts it."""
    return {
        "reach": "380",
        "stack": "560",
        "hta": "73",
        "sta": "73",
        "stl": "500",
        "stemLength": 100,
        "stemAngle": -6,
        "spacersHeight": 20,
        "stemHeight": 40,
        "headsetHeight": 10,
    }


@pytest.fixture
def bike_dataset() -> list[dict[str, Any]]:
    """150 frames all within 10mm of 380/560, plus a few far away.

    Values are strings, as a spreadsheet export delivers them.
    """
    bikes = []
    for i in range(150):
        bikes.append({
            "brand": ["Trek", "Canyon", "Specialized"][i % 3],
            "model": f"Model {i}",
            "size": str(48 + i % 10),
            "reach": str(380 + (i % 21) - 10),
            "stack": str(560 + (i % 7) - 3),
            "style": "Endurance" if i % 2 == 0 else "Race",
            "material": "Carbon" if i % 4 else "Aluminium",
            "sr_ratio": f"{(560 + (i % 7) - 3) / (380 + (i % 21) - 10):.2f}",
            "sta": "73.5",
        })
    bikes.append({"brand": "Trek", "model": "XL", "size": "62", "reach": "410", "stack": "640"})
    bikes.append({"brand": "Canyon", "model": "XS", "size": "47", "reach": "355", "stack": "500"})
    return bikes
