import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from storefront.errors import ErrorHandler
from storefront.utils.rate_limit import optional_rate_limit
from storefront.checkout import webhook as checkout_webhook
from storefront.checkout.flow import create_session_with_recovery
from storefront.checkout.models import CheckoutRequest
from storefront.checkout.session import CheckoutSessionService
from storefront.checkout.stripe_client import StripeCheckoutProvider

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/checkout", tags=["Checkout API"])

# Réponses consommées directement par le front (autre origine)
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

# module storefront.checkout.views
def get_provider() -> StripeCheckoutProvider:
    return StripeCheckoutProvider()

def get_checkout_service(provider: StripeCheckoutProvider = Depends(get_provider)) -> CheckoutSessionService:
    return CheckoutSessionService(provider)

def get_error_handler(request: Request) -> ErrorHandler:
    handler = getattr(request.app.state, "error_handler", None)
    if handler is None:
        handler = ErrorHandler()
        request.app.state.error_handler = handler
    return handler

def _json(body: Dict[str, Any], status_code: int) -> JSONResponse:
    return JSONResponse(body, status_code=status_code, headers=CORS_HEADERS)

def _first_validation_message(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Requête invalide"
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()))
    return f"Requête invalide ({loc}): {first.get('msg')}" if loc else f"Requête invalide: {first.get('msg')}"


@router.options("/session", include_in_schema=False)
async def checkout_session_preflight():
    """Preflight CORS: expose POST, OPTIONS."""
    return PlainTextResponse("ok", headers=CORS_HEADERS)


@router.post("/session", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def create_checkout_session(
    request: Request,
    service: CheckoutSessionService = Depends(get_checkout_service),
    handler: ErrorHandler = Depends(get_error_handler),
):
    """
    Crée une session Stripe Checkout pour le panier (checkout invité autorisé).
    - Entrée JSON: { "items": [CartItem...], "orderId": "...", "customerEmail"?: "..." }
    - 200 {id, url}: session créée
    - 400 {error}: panier vide, prix Stripe manquant, quantité invalide (jamais retenté)
    - 500 {error}: échec Stripe (classifié, une relance si retryable)
    """
    try:
        body = await request.json()
    except ValueError:
        return _json({"error": "Corps JSON invalide"}, 400)
    if not isinstance(body, dict):
        return _json({"error": "Corps JSON invalide"}, 400)

    try:
        checkout = CheckoutRequest.model_validate(body)
    except ValidationError as e:
        return _json({"error": _first_validation_message(e)}, 400)

    response = await create_session_with_recovery(service, checkout, handler)
    return _json(response.body, response.status_code)


@router.post("/webhook", include_in_schema=False)
async def stripe_webhook(request: Request, provider: StripeCheckoutProvider = Depends(get_provider)):
    """
    Webhook Stripe: signature vérifiée (Stripe-Signature + STRIPE_WEBHOOK_SECRET).
    - 400 si signature absente ou invalide
    - 200 {"received": true} une fois l'événement traité ou ignoré
    """
    sig_header = request.headers.get("stripe-signature")
    if not sig_header:
        return JSONResponse({"error": "No signature provided"}, status_code=400)

    payload = await request.body()
    try:
        event = provider.construct_event(payload, sig_header)
    except Exception as e:
        logger.warning("checkout.webhook signature verification failed: %s", e)
        return JSONResponse({"error": str(e)}, status_code=400)

    try:
        outcome = await run_in_threadpool(checkout_webhook.process_event, event)
    except Exception:
        logger.exception("Erreur stripe_webhook")
        return JSONResponse({"error": "Internal server error"}, status_code=500)
    return JSONResponse({"received": True, "status": outcome})
