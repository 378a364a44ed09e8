"""
Error classification for offer analysis.

Data quality errors cover malformed or insufficient market history and are
recoverable: the pipeline resolves them locally and reports "cannot advise".
System failures cover misconfiguration and numeric breakdowns.
"""

from .data_quality import (
    DataQualityError,
    TemporalDataError,
    MissingDataError,
    MalformedDataError,
    InsufficientDataError,
)
from .system_failures import (
    SystemFailureError,
    ForecastCalculationError,
    ConfigurationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "TemporalDataError",
    "MissingDataError",
    "MalformedDataError",
    "InsufficientDataError",
    # System Failures
    "SystemFailureError",
    "ForecastCalculationError",
    "ConfigurationError",
]
