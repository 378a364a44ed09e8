"""
Logging configuration and utilities for the offer analysis pipeline.
"""
from .config import configure_logging, get_logger, get_pricing_logger

__all__ = ["configure_logging", "get_logger", "get_pricing_logger"]
