"""
Centralized logging configuration for the portfolio client.

This module provides standardized logging configuration using structlog
for all components. Session routing, book reconciliation and the trade
dialog all log through loggers obtained here so output stays structured
and consistent.
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
    Configure structlog for the entire client.

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


def get_session_logger(name: str) -> FilteringBoundLogger:
    """Get a logger bound to the session/transport subsystem."""
    return get_logger(name).bind(subsystem="session")


def get_trade_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger specifically configured for the trade dialog.

    Trade dialog decisions are user-visible and audited, so the logger
    carries an audit flag alongside the subsystem name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for trade workflow events
    """
    return get_logger(name).bind(
        subsystem="trade_dialog",
        audit_trail=True
    )


def log_validation_decision(
    logger: FilteringBoundLogger,
    check_name: str,
    passed: bool,
    ticker: Optional[str],
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a trade validation rule outcome with standardized format.

    Args:
        logger: Structlog logger instance
        check_name: Name of the validation rule
        passed: Whether the rule passed
        ticker: Ticker of the bound position
        reason: Detailed reason for the decision
        context: Additional context data
    """
    bound_logger = logger.bind(
        check_name=check_name,
        check_result="PASS" if passed else "FAIL",
        ticker=ticker,
        reason=reason,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if passed:
        bound_logger.info("Trade validation passed")
    else:
        bound_logger.warning("Trade validation failed")


def log_dialog_transition(
    logger: FilteringBoundLogger,
    ticker: Optional[str],
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a trade dialog state transition with standardized format.

    Args:
        logger: Structlog logger instance
        ticker: Ticker of the bound position, if any
        from_state: Current state
        to_state: Target state
        trigger: What triggered the transition
        context: Additional context data
    """
    bound_logger = logger.bind(
        ticker=ticker,
        from_state=from_state,
        to_state=to_state,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Trade dialog transition")
