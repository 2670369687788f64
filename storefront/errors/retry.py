"""
Politique de retry (machine à états explicite sur AppError).
- 3 retries maximum (4 essais au total avec l'appel initial).
- Backoff exponentiel: 2^retry_count * 1000 ms depuis le dernier retry.
- Vérification non bloquante: l'appelant revient plus tard, on ne dort jamais ici.
"""
from datetime import datetime, timedelta
from typing import Optional

from .models import AppError, utcnow

# module storefront.errors.retry
MAX_RETRIES = 3
BASE_BACKOFF_MS = 1000


def backoff_ms(error: AppError) -> int:
    return (2 ** error.retry_count) * BASE_BACKOFF_MS


def can_retry(error: AppError, now: Optional[datetime] = None) -> bool:
    if not error.retryable or error.retry_count >= MAX_RETRIES:
        return False
    if error.last_retry_time is None:
        return True
    now = now or utcnow()
    return now - error.last_retry_time >= timedelta(milliseconds=backoff_ms(error))


def mark_retry(error: AppError, now: Optional[datetime] = None) -> AppError:
    """
    Enregistre une tentative: incrémente retry_count et horodate last_retry_time.
    À appeler avant de relancer l'opération.
    """
    error.retry_count += 1
    error.last_retry_time = now or utcnow()
    return error
