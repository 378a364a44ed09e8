"""
Centralized logging configuration for the offer analysis pipeline.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the package should use this
configuration to ensure consistent formatting and structured logging.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_pricing_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for pricing decisions (mode selection, liquidity gates).

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger bound to the pricing subsystem
    """
    return get_logger(name).bind(
        subsystem="pricing",
        audit_trail=True
    )


def log_gate_decision(
    logger: FilteringBoundLogger,
    gate_name: str,
    passed: bool,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a liquidity gating decision with standardized format.

    Args:
        logger: Structlog logger instance
        gate_name: Name of the gate being evaluated (e.g. "buy_liquidity")
        passed: Whether the gate passed or failed
        reason: Detailed reason for the decision
        context: Additional context data
    """
    bound_logger = logger.bind(
        gate_name=gate_name,
        gate_result="PASS" if passed else "FAIL",
        reason=reason,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if passed:
        bound_logger.debug("Gate passed")
    else:
        bound_logger.info("Gate failed")


def log_mode_selection(
    logger: FilteringBoundLogger,
    method: str,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log which pricing strategy was selected and why.

    Args:
        logger: Structlog logger instance
        method: Selected analysis method
        reason: Why that method was chosen
        context: Additional context data
    """
    bound_logger = logger.bind(
        analysis_method=method,
        reason=reason,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Pricing strategy selected")
