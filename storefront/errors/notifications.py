"""
Contrat du puits de notifications (messages visibles par l'utilisateur).
Le coeur ne dépend que de notify(kind, message, duration_ms).
"""
import logging
from typing import Any, Dict, List, Optional, Protocol

from .models import AppError, SEVERITY_CRITICAL

logger = logging.getLogger(__name__)

# module storefront.errors.notifications
KIND_SUCCESS = "success"
KIND_ERROR = "error"
KIND_INFO = "info"
KINDS = (KIND_SUCCESS, KIND_ERROR, KIND_INFO)

DEFAULT_DURATION_MS = 5000
PERSISTENT_DURATION_MS = 0


class NotificationSink(Protocol):
    def notify(self, kind: str, message: str, duration_ms: Optional[int] = None) -> None:
        ...


def duration_for(error: AppError) -> int:
    """critical => 0 (reste affichée jusqu'à fermeture), sinon 5 secondes."""
    if error.severity == SEVERITY_CRITICAL:
        return PERSISTENT_DURATION_MS
    return DEFAULT_DURATION_MS


def _check_kind(kind: str) -> None:
    if kind not in KINDS:
        raise ValueError(f"Type de notification inconnu: {kind}")


class LoggingNotificationSink:
    """Puits par défaut côté serveur: écrit la notification dans les logs."""

    def notify(self, kind: str, message: str, duration_ms: Optional[int] = None) -> None:
        _check_kind(kind)
        duration = DEFAULT_DURATION_MS if duration_ms is None else duration_ms
        level = logging.WARNING if kind == KIND_ERROR else logging.INFO
        logger.log(level, "notification kind=%s duration_ms=%s message=%s", kind, duration, message)


class InMemoryNotificationSink:
    """Conserve les notifications émises (tests, ou renvoi au client)."""

    def __init__(self):
        self.notifications: List[Dict[str, Any]] = []

    def notify(self, kind: str, message: str, duration_ms: Optional[int] = None) -> None:
        _check_kind(kind)
        duration = DEFAULT_DURATION_MS if duration_ms is None else duration_ms
        self.notifications.append({"kind": kind, "message": message, "duration_ms": duration})
