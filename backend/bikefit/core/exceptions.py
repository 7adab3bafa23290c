"""Custom exception classes.

Only malformed calls raise. Out-of-range or missing measurements are not
errors; the resolvers publish sentinels for them instead.
"""

from fastapi import HTTPException, status


class BikeFitException(HTTPException):
    """Base exception for application errors."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        code: str = "BIKEFIT_ERROR",
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code


class UnknownCalculationTypeError(BikeFitException):
    def __init__(self, calculation_type: object):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown calculation type: {calculation_type!r}",
            code="UNKNOWN_CALCULATION_TYPE",
        )
        self.calculation_type = calculation_type


class InvalidPayloadError(BikeFitException):
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
            code="INVALID_PAYLOAD",
        )


class TooManyBikesError(BikeFitException):
    def __init__(self, count: int, limit: int):
        super().__init__(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Too many bikes in one request: {count} (max {limit})",
            code="TOO_MANY_BIKES",
        )


class DatasetTooLargeError(BikeFitException):
    def __init__(self, count: int, limit: int):
        super().__init__(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Bike dataset too large: {count} records (max {limit})",
            code="DATASET_TOO_LARGE",
        )
