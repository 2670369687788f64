"""
Traitement d'erreur de haut niveau: classifie, journalise, notifie, historise,
puis tente un retry si la politique l'autorise.
Seul l'appelant de plus haut niveau utilise ce module; les couches checkout
échouent vite et ne décident jamais d'un retry.
"""
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional

from .classifier import handle_error
from .history import ErrorHistory
from .models import AppError, utcnow
from .notifications import KIND_ERROR, NotificationSink, LoggingNotificationSink, duration_for
from .retry import can_retry, mark_retry

logger = logging.getLogger(__name__)

# module storefront.errors.handler
class ErrorHandler:
    def __init__(
        self,
        sink: Optional[NotificationSink] = None,
        history: Optional[ErrorHistory] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.sink = sink or LoggingNotificationSink()
        self.history = history if history is not None else ErrorHistory()
        self.clock = clock or utcnow

    def _surface(self, error: Any) -> AppError:
        app_error = handle_error(error)
        logger.error("Application error: %s", app_error.to_dict())
        self.sink.notify(KIND_ERROR, app_error.message, duration_for(app_error))
        self.history.record(app_error)
        return app_error

    def _start_retry(self, app_error: AppError, retry_fn: Optional[Callable[..., Any]]) -> bool:
        """Vrai si une relance doit avoir lieu; l'état de retry est alors enregistré."""
        if retry_fn is None:
            return False
        now = self.clock()
        if not can_retry(app_error, now):
            return False
        mark_retry(app_error, now)
        return True

    def _recovered(self, app_error: AppError) -> AppError:
        logger.info("Operation recovered after retry: retry_count=%s code=%s", app_error.retry_count, app_error.code)
        return app_error

    def handle(self, error: Any, retry_fn: Optional[Callable[[], Any]] = None) -> AppError:
        """
        Retourne l'AppError correspondant à l'échec.
        - Une seule notification par erreur remontée.
        - Si retry_fn est fourni et can_retry(): mark_retry puis relance.
          Succès: l'erreur (retry_count à jour) est retournée.
          Nouvel échec: une AppError neuve, classifiée depuis ce nouvel échec.
        """
        app_error = self._surface(error)
        if not self._start_retry(app_error, retry_fn):
            return app_error
        try:
            retry_fn()
        except Exception as retry_error:
            return handle_error(retry_error)
        return self._recovered(app_error)

    async def handle_async(
        self, error: Any, retry_fn: Optional[Callable[[], Awaitable[Any]]] = None
    ) -> AppError:
        """Variante de handle() pour une opération asynchrone (ex: appel Stripe)."""
        app_error = self._surface(error)
        if not self._start_retry(app_error, retry_fn):
            return app_error
        try:
            await retry_fn()
        except Exception as retry_error:
            return handle_error(retry_error)
        return self._recovered(app_error)
