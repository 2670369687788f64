from collections import deque
from typing import Any, Deque, Dict, List

from .models import AppError

# module storefront.errors.history
MAX_STORED_ERRORS = 10


class ErrorHistory:
    """
    Stockage éphémère (portée session) des dernières erreurs affichées.
    Garde les 10 plus récentes, la plus ancienne est évincée en premier.
    """

    def __init__(self, limit: int = MAX_STORED_ERRORS):
        self._items: Deque[Dict[str, Any]] = deque(maxlen=limit)

    def record(self, error: AppError) -> None:
        self._items.append(error.to_dict())

    def list(self) -> List[Dict[str, Any]]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
