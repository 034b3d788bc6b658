"""
Centralized logging configuration for the treatment plan builder.

This module provides standardized logging configuration using structlog
for all components. Ledger mutations and stepper transitions are logged
through the helpers below so that audit records share one shape.
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


def get_ledger_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for cost ledger mutations.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for ledger audit records
    """
    # Initial values keep the proxy lazy, so configure_logging() applies
    # even when the logger is created at import time.
    return structlog.get_logger(
        name,
        subsystem="ledger",
        audit_trail=True
    )


def get_stepper_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for stepper state transitions.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for stepper state transitions
    """
    return structlog.get_logger(
        name,
        subsystem="stepper",
        audit_trail=True
    )


def log_ledger_change(
    logger: FilteringBoundLogger,
    plan_id: Optional[str],
    operation: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a ledger mutation with standardized format.

    Args:
        logger: Structlog logger instance
        plan_id: ID of the plan owning the ledger (None for unsaved drafts)
        operation: Ledger operation name (add, update, remove)
        context: Additional context data (line index, field, totals)
    """
    bound_logger = logger.bind(
        plan_id=plan_id,
        operation=operation,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Ledger changed")


def log_state_transition(
    logger: FilteringBoundLogger,
    stepper_id: str,
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a stepper state transition with standardized format.

    Args:
        logger: Structlog logger instance
        stepper_id: Identifier of the stepper instance
        from_state: Current phase
        to_state: Target phase
        trigger: What triggered the transition
        context: Additional context data
    """
    bound_logger = logger.bind(
        stepper_id=stepper_id,
        from_state=from_state,
        to_state=to_state,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.debug("State transition")
