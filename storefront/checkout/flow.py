"""
Appelant de plus haut niveau du checkout: c'est ici, et seulement ici, que les
échecs passent par la classification, la politique de retry et les notifications.
- 400 (validation): notifiés, jamais retentés.
- 500 (Stripe): classifiés; si retryable et can_retry(), une relance immédiate
  (le backoff des relances suivantes est vérifié au prochain appel, sans attente).
"""
import logging
from typing import Any, Dict

from storefront.errors import AppError, ErrorHandler, SEVERITY_MEDIUM
from .line_items import build_line_items
from .models import CheckoutRequest, CheckoutResponse
from .session import CheckoutSessionService

logger = logging.getLogger(__name__)

# module storefront.checkout.flow
async def create_session_with_recovery(
    service: CheckoutSessionService,
    request: CheckoutRequest,
    handler: ErrorHandler,
) -> CheckoutResponse:
    built = build_line_items(request.items)
    if not built.is_ok():
        handler.handle(AppError(built.message, code=built.kind, severity=SEVERITY_MEDIUM, retryable=False))
        response = CheckoutResponse(400, {"error": built.message}, kind=built.kind)
        response.body.update({"code": built.kind, "retryable": False})
        return response

    line_items = built.value
    response = await service.request_session(request, line_items)
    if response.status_code != 500:
        if response.kind:
            handler.handle(AppError(response.body["error"], code=response.kind, retryable=False))
            response.body.update({"code": response.kind, "retryable": False})
        return response

    recovered: Dict[str, Any] = {}

    async def _retry():
        retried = await service.request_session(request, line_items)
        if retried.status_code == 500:
            raise retried.error or RuntimeError(retried.body.get("error") or "Internal server error")
        recovered["response"] = retried

    failure = response.error or RuntimeError(response.body.get("error") or "Internal server error")
    app_error = await handler.handle_async(failure, _retry)
    if "response" in recovered:
        logger.info("checkout.recovered order_id=%s retry_count=%s", request.order_id, app_error.retry_count)
        return recovered["response"]

    response.body.update({
        "error": app_error.message,
        "code": app_error.code,
        "retryable": app_error.retryable,
    })
    return response
