"""
Structured logging configuration for the record formatter services
Emits JSON lines so the formatter's own logs can be shipped through the same pipeline
"""
import logging
import os
import sys
from pythonjsonlogger import jsonlogger


def setup_logging(service_name: str, log_level: str = None) -> logging.Logger:
    """
    Configure structured JSON logging for a service

    Args:
        service_name: Name of the service (e.g., 'record_formatter')
        log_level: Optional log level override (default: INFO, or from LOG_LEVEL env)

    Returns:
        Configured logger instance
    """
    if log_level is None:
        log_level = os.getenv('LOG_LEVEL', 'INFO')

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(service_name)
    logger.setLevel(numeric_level)

    # Repeated setup (tests, reloads) must not stack handlers
    logger.handlers = []

    # Field names line up with the canonical record the formatter produces
    log_format = '%(asctime)s %(name)s %(levelname)s %(message)s %(module)s %(lineno)d'
    formatter = jsonlogger.JsonFormatter(
        log_format,
        rename_fields={
            'asctime': 'timestamp',
            'name': 'service_name',
            'lineno': 'line'
        }
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_file = os.getenv('LOG_FILE')
    if log_file:
        try:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Could not create file handler: {e}")

    logger.propagate = False

    return logger


def log_audit_event(logger: logging.Logger, event_type: str, **kwargs):
    """
    Log an audit event with standard structure

    Args:
        logger: Logger instance
        event_type: Type of audit event (e.g., 'pipeline_loaded')
        **kwargs: Additional fields to include in audit log
    """
    audit_data = {
        'audit': True,
        'event_type': event_type,
        **kwargs
    }
    logger.info('AUDIT_EVENT', extra=audit_data)
