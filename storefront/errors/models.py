"""
Modèle d'erreur applicatif (AppError).
- Une AppError est créée une seule fois par échec.
- Seule la politique de retry la modifie (retry_count, last_retry_time).
"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# module storefront.errors.models
SEVERITY_LOW = "low"
SEVERITY_MEDIUM = "medium"
SEVERITY_HIGH = "high"
SEVERITY_CRITICAL = "critical"

# Ordre croissant: low < medium < high < critical
SEVERITIES = (SEVERITY_LOW, SEVERITY_MEDIUM, SEVERITY_HIGH, SEVERITY_CRITICAL)

UNKNOWN_ERROR = "UNKNOWN_ERROR"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AppError(Exception):
    """
    Erreur classifiée: message, code machine optionnel, métadonnées,
    sévérité, drapeau retryable et état de retry.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        severity: str = SEVERITY_MEDIUM,
        retryable: bool = False,
        timestamp: Optional[datetime] = None,
    ):
        super().__init__(message)
        if severity not in SEVERITIES:
            raise ValueError(f"Sévérité inconnue: {severity}")
        self.message = message
        self.code = code
        self.metadata = metadata
        self.severity = severity
        self.retryable = retryable
        self.retry_count = 0
        self.last_retry_time: Optional[datetime] = None
        self.timestamp = timestamp or utcnow()

    @property
    def name(self) -> str:
        return type(self).__name__

    def severity_rank(self) -> int:
        return SEVERITIES.index(self.severity)

    def to_dict(self) -> Dict[str, Any]:
        """
        Sérialisation JSON-compatible (historique, logs).
        Les métadonnées non sérialisables sont converties via repr().
        """
        return {
            "name": self.name,
            "message": self.message,
            "code": self.code,
            "severity": self.severity,
            "metadata": _safe_metadata(self.metadata),
            "retryable": self.retryable,
            "retry_count": self.retry_count,
            "last_retry_time": self.last_retry_time.isoformat() if self.last_retry_time else None,
            "timestamp": self.timestamp.isoformat(),
        }

    def __repr__(self) -> str:
        return f"AppError(code={self.code!r}, severity={self.severity!r}, retryable={self.retryable!r}, message={self.message!r})"


def _safe_metadata(metadata: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if metadata is None:
        return None
    safe: Dict[str, Any] = {}
    for key, value in metadata.items():
        if value is None or isinstance(value, (str, int, float, bool)):
            safe[str(key)] = value
        else:
            safe[str(key)] = repr(value)
    return safe
