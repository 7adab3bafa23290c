"""Bike search: rank dataset frames against a target reach and stack."""

from .filter import BikeMatch, BikeSearchFilter, SearchCriteria, SearchResult
from .records import BikeRecord, normalize_header, records_from_rows

__all__ = [
    "BikeMatch",
    "BikeRecord",
    "BikeSearchFilter",
    "SearchCriteria",
    "SearchResult",
    "normalize_header",
    "records_from_rows",
]
