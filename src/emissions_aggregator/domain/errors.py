# domain/errors.py


class EmissionsError(Exception):
    """Base class for all controlled emissions pipeline failures."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(value)

    def __str__(self) -> str:
        return f"{self.__doc__} ({self.value})"


class MissingMetadataError(EmissionsError):
    """No registry metadata for a protocol from a guarded adapter."""


class NullSectionsError(EmissionsError):
    """Adapter produced no raw sections."""


class NullChartDataError(EmissionsError):
    """Chart shaping produced no real-time data."""


class ItemTimeoutError(EmissionsError):
    """Protocol processing exceeded the per-item timeout."""


class ValuationError(EmissionsError):
    """USD unlock valuation could not be computed."""


class BatchTimeoutError(EmissionsError):
    """Batch run exceeded the overall timeout."""
