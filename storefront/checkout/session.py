"""
Cas d'usage 'checkout': assemble la requête de session Stripe et interprète la réponse.
- Échoue vite: aucune classification ni décision de retry ici.
- Le fournisseur est injecté à la construction (faux fournisseur en tests).
"""
import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence

from starlette.concurrency import run_in_threadpool

from storefront.config import CheckoutSettings
from . import repository as default_repository
from .line_items import build_line_items
from .metadata import make_metadata
from .models import CheckoutRequest, CheckoutResponse, CheckoutSessionResult, LineItem
from .result import EMPTY_ORDER

logger = logging.getLogger(__name__)

PAYMENT_MODE = "payment"


class CheckoutProvider(Protocol):
    def create_session(self, **params: Any) -> Dict[str, Any]:
        ...


def bad_request(message: str, kind: str) -> CheckoutResponse:
    return CheckoutResponse(400, {"error": message}, kind=kind)


def server_error(message: str, error: Optional[BaseException] = None) -> CheckoutResponse:
    return CheckoutResponse(500, {"error": message or "Internal server error"}, error=error)


# module storefront.checkout.session
class CheckoutSessionService:
    def __init__(
        self,
        provider: CheckoutProvider,
        settings: Optional[CheckoutSettings] = None,
        repository: Any = None,
    ):
        self.provider = provider
        self.settings = settings or CheckoutSettings()
        self.repository = repository if repository is not None else default_repository

    def build_session_params(self, request: CheckoutRequest, line_items: Sequence[LineItem]) -> Dict[str, Any]:
        """
        Payload Stripe Checkout. URLs, pays et locale viennent de la configuration,
        jamais du client. customer_email est omis en checkout invité.
        """
        params: Dict[str, Any] = {
            "line_items": [li.to_stripe() for li in line_items],
            "mode": PAYMENT_MODE,
            "success_url": self.settings.success_url,
            "cancel_url": self.settings.cancel_url,
            "metadata": make_metadata(request.order_id, self.settings.merchant_label),
            "shipping_address_collection": {
                "allowed_countries": list(self.settings.allowed_countries),
            },
            "locale": self.settings.locale,
        }
        if request.customer_email:
            params["customer_email"] = request.customer_email
        return params

    async def create(self, request: CheckoutRequest) -> CheckoutResponse:
        """
        Construit les line_items puis demande la session.
        - Validation (panier vide, prix manquant, quantité): 400, aucun appel Stripe.
        """
        built = build_line_items(request.items)
        if not built.is_ok():
            logger.info("checkout.validation_failed order_id=%s kind=%s", request.order_id, built.kind)
            return bad_request(built.message, built.kind)
        return await self.request_session(request, built.value)

    async def request_session(self, request: CheckoutRequest, line_items: List[LineItem]) -> CheckoutResponse:
        """
        Un appel Stripe par tentative.
        - 200 {id, url} si la session est créée
        - 400 EmptyOrder si aucune ligne
        - 500 {error} si Stripe échoue
        """
        if not line_items:
            return bad_request("Commande vide", EMPTY_ORDER)

        params = self.build_session_params(request, line_items)
        logger.info("checkout.create_session order_id=%s line_items=%s", request.order_id, len(line_items))
        try:
            session = await run_in_threadpool(self.provider.create_session, **params)
        except Exception as e:
            logger.exception("Erreur create_session order_id=%s", request.order_id)
            return server_error(str(e), e)

        session_id = (session or {}).get("id")
        if not session_id:
            return server_error("Session Stripe invalide")

        result = CheckoutSessionResult(id=session_id, url=session.get("url"))
        try:
            await run_in_threadpool(self._record_session, request, session_id)
        except Exception:
            # la session existe côté Stripe: on la renvoie quand même
            logger.exception("Erreur record_session order_id=%s session_id=%s", request.order_id, session_id)
        return CheckoutResponse(200, {"id": result.id, "url": result.url}, result=result)

    def _record_session(self, request: CheckoutRequest, session_id: str) -> None:
        # Suivi best-effort: un échec d'écriture ne change pas la réponse
        self.repository.update_order_status(request.order_id, "pending_payment")
        self.repository.insert_payment_session(
            order_id=request.order_id,
            stripe_session_id=session_id,
            currency=self.settings.currency,
        )
