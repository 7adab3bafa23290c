"""Geometry engine package for bike fit calculations.

Provides the stem, frame and saddle resolvers and the calculation dispatch
used by the fit tools.
"""

from bikefit.geometry.types import (
    SENTINEL,
    FrameGeometry,
    HandlebarTarget,
    SaddlePosition,
    StemConfig,
)
from bikefit.geometry.stem import StemVectorResolver
from bikefit.geometry.frame import FrameGeometryResolver
from bikefit.geometry.saddle import SaddleGeometryResolver
from bikefit.geometry.calculator import GeometryCalculator

__all__ = [
    "SENTINEL",
    "FrameGeometry",
    "HandlebarTarget",
    "SaddlePosition",
    "StemConfig",
    "StemVectorResolver",
    "FrameGeometryResolver",
    "SaddleGeometryResolver",
    "GeometryCalculator",
]
