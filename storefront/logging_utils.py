"""
Structured logging utilities for storefront.

Provides context management and structured logging helpers so that log lines
emitted while resolving or destroying product relations carry the product
and relation type they concern.

Usage:
    from storefront.logging_utils import get_logger, add_log_context

    logger = get_logger(__name__)

    with add_log_context(product_id=product.pk, relation_type="upsells"):
        logger.info("Resolving related products")
"""

import logging
from contextvars import ContextVar
from typing import Any, Dict, Optional


# Context-local storage for log context
_log_context: ContextVar[Dict[str, Any]] = ContextVar('log_context', default={})

# Fields rendered by StructuredLogFormatter, in this order
CONTEXT_FIELDS = [
    'service_name',
    'model',
    'product_id',
    'relation_type',
    'relation_type_id',
    'candidate_count',
    'deleted_count',
]


class ContextualLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that automatically includes context in log records.

    Context set with set_log_context/add_log_context is merged into the
    ``extra`` of every record, so formatters and filters can read it as
    record attributes.
    """

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        context = _log_context.get({})

        extra = kwargs.get('extra', {})
        extra.update(context)
        kwargs['extra'] = extra

        return msg, kwargs


def get_logger(name: str) -> ContextualLoggerAdapter:
    """
    Get a logger with automatic context injection.

    Args:
        name: Logger name (typically __name__)

    Returns:
        ContextualLoggerAdapter: Logger with context support
    """
    base_logger = logging.getLogger(name)
    return ContextualLoggerAdapter(base_logger, {})


def set_log_context(**kwargs: Any) -> None:
    """
    Set context for all subsequent log messages in this thread/async context.

    Usage:
        set_log_context(product_id=123)
        logger.info("Operation complete")  # Includes product_id
    """
    current_context = _log_context.get({}).copy()
    current_context.update(kwargs)
    _log_context.set(current_context)


def clear_log_context() -> None:
    """Clear all log context for the current thread/async context."""
    _log_context.set({})


def get_log_context() -> Dict[str, Any]:
    """Get a copy of the current log context."""
    return _log_context.get({}).copy()


class add_log_context:
    """
    Context manager to temporarily add log context.

    Usage:
        with add_log_context(product_id=123, relation_type='upsells'):
            logger.info("Resolving")  # Includes product_id and relation_type
        # Context is restored after the block
    """

    def __init__(self, **kwargs: Any):
        self.new_context = kwargs
        self.previous_context: Optional[Dict[str, Any]] = None

    def __enter__(self):
        self.previous_context = get_log_context()
        set_log_context(**self.new_context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.previous_context is not None:
            _log_context.set(self.previous_context)
        else:
            clear_log_context()


class StructuredLogFormatter(logging.Formatter):
    """
    Log formatter that outputs structured (key=value) logs.

    Example output:
        2026-01-28 10:30:45,120 INFO service_name=related_products product_id=12 message="Destroyed relations"
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, self.datefmt)
        level = record.levelname
        parts = [f"{timestamp} {level}"]

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                value = getattr(record, field)
                # Quote strings with spaces
                if isinstance(value, str) and ' ' in value:
                    parts.append(f'{field}="{value}"')
                else:
                    parts.append(f'{field}={value}')

        msg = record.getMessage()
        if ' ' in msg or '=' in msg:
            parts.append(f'message="{msg}"')
        else:
            parts.append(f'message={msg}')

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)

        if record.exc_text:
            parts.append(f'\n{record.exc_text}')

        return ' '.join(parts)


class _ServiceLoggerAdapter(ContextualLoggerAdapter):
    def __init__(self, logger: logging.Logger, service_name: str):
        super().__init__(logger, {})
        self.service_name = service_name

    def process(self, msg, kwargs):
        msg, kwargs = super().process(msg, kwargs)
        kwargs['extra']['service_name'] = self.service_name
        return msg, kwargs


def get_service_logger(service_name: str) -> ContextualLoggerAdapter:
    """
    Get a logger for a service with the service name included.

    Usage:
        logger = get_service_logger('related_products')
        logger.info("Relations destroyed")  # Includes service_name=related_products

    Args:
        service_name: Name of the service

    Returns:
        ContextualLoggerAdapter: Logger with service context
    """
    logger = logging.getLogger(f"storefront.services.{service_name}")
    return _ServiceLoggerAdapter(logger, service_name)
