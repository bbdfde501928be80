"""Common utilities for the record formatter services"""

from .logging_config import setup_logging, log_audit_event

__all__ = ["setup_logging", "log_audit_event"]
