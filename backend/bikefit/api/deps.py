"""Dependency injection for routes."""

from fastapi import Depends

from bikefit.config import Settings, get_settings
from bikefit.geometry import GeometryCalculator
from bikefit.search import BikeSearchFilter


def get_calculator(
    settings: Settings = Depends(get_settings),
) -> GeometryCalculator:
    return GeometryCalculator(max_bikes_per_request=settings.max_bikes_per_request)


def get_search_filter(
    settings: Settings = Depends(get_settings),
) -> BikeSearchFilter:
    return BikeSearchFilter(result_limit=settings.search_result_limit)
