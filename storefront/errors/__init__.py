"""
Module 'errors': point d'entrée public.
Réunit le modèle AppError, la classification, la politique de retry,
le puits de notifications et l'historique de session.
"""

from .models import (
    AppError,
    SEVERITIES,
    SEVERITY_LOW,
    SEVERITY_MEDIUM,
    SEVERITY_HIGH,
    SEVERITY_CRITICAL,
    UNKNOWN_ERROR,
)
from .classifier import handle_error, is_network_failure
from .retry import MAX_RETRIES, backoff_ms, can_retry, mark_retry
from .notifications import (
    NotificationSink,
    LoggingNotificationSink,
    InMemoryNotificationSink,
    duration_for,
)
from .history import ErrorHistory, MAX_STORED_ERRORS
from .handler import ErrorHandler

__all__ = [
    # models
    "AppError",
    "SEVERITIES",
    "SEVERITY_LOW",
    "SEVERITY_MEDIUM",
    "SEVERITY_HIGH",
    "SEVERITY_CRITICAL",
    "UNKNOWN_ERROR",
    # classification
    "handle_error",
    "is_network_failure",
    # retry
    "MAX_RETRIES",
    "backoff_ms",
    "can_retry",
    "mark_retry",
    # notifications
    "NotificationSink",
    "LoggingNotificationSink",
    "InMemoryNotificationSink",
    "duration_for",
    # handler
    "ErrorHistory",
    "MAX_STORED_ERRORS",
    "ErrorHandler",
]
