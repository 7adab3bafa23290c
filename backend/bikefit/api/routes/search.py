"""Bike search endpoints."""

import logging

from fastapi import APIRouter, Depends

from bikefit.api.deps import get_search_filter
from bikefit.config import Settings, get_settings
from bikefit.core.exceptions import DatasetTooLargeError
from bikefit.models.schemas.search import (
    DatasetModel,
    SearchRequest,
    SearchResponse,
    SummaryResponse,
)
from bikefit.search import BikeSearchFilter

logger = logging.getLogger(__name__)

router = APIRouter()


def _load_records(dataset: DatasetModel, settings: Settings) -> list[dict]:
    records = dataset.records()
    if len(records) > settings.max_search_records:
        raise DatasetTooLargeError(len(records), settings.max_search_records)
    return records


@router.post("/search", response_model=SearchResponse)
def search_bikes(
    request: SearchRequest,
    search_filter: BikeSearchFilter = Depends(get_search_filter),
    settings: Settings = Depends(get_settings),
) -> SearchResponse:
    """Rank dataset bikes against the target reach and stack."""
    records = _load_records(request, settings)
    result = search_filter.search(records, request.criteria.to_criteria())

    matches = result.matches
    if request.sort_column:
        matches = search_filter.sort_matches(
            matches, request.sort_column, request.sort_descending
        )

    logger.info(
        "Bike search over %d records: %d matches, %d displayed",
        len(records),
        result.total_matches,
        len(matches),
    )
    return SearchResponse(
        matches=[match.to_dict() for match in matches],
        total_matches=result.total_matches,
        displayed=len(matches),
        warnings=result.warnings,
    )


@router.post("/summary", response_model=SummaryResponse)
def dataset_summary(
    dataset: DatasetModel,
    search_filter: BikeSearchFilter = Depends(get_search_filter),
    settings: Settings = Depends(get_settings),
) -> SummaryResponse:
    """Slider bounds and filter options for a dataset."""
    records = _load_records(dataset, settings)
    return SummaryResponse(
        bounds=search_filter.dataset_bounds(records),
        options=search_filter.filter_options(records),
    )
