"""
System failure error classifications for unrecoverable errors.

These exceptions represent failures that need a code or configuration fix
rather than more market data.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class ForecastCalculationError(SystemFailureError):
    """Numeric breakdown while fitting or projecting a forecast model."""

    def __init__(self, message: str, series_name: Optional[str] = None,
                 calculation_input: Optional[Dict[str, Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.series_name = series_name
        self.calculation_input = calculation_input


class ConfigurationError(SystemFailureError):
    """Analysis configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
