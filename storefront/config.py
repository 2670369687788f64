# storefront.config
from pathlib import Path
import os
from typing import List, Optional
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=True)

"""
Configuration centrale de la boutique.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Normalise et expose les secrets/URLs (Supabase, Stripe) et les origines CORS
- Fixe les paramètres du checkout (URLs de retour, pays de livraison, locale):
  ils ne proviennent jamais de la requête du client
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _split_env(name: str, default: str) -> List[str]:
    return [p.strip() for p in os.getenv(name, default).split(",") if p.strip()]

# Supabase: URL et clés (anon/service)
SUPABASE_URL = _clean_env(os.getenv("SUPABASE_URL") or os.getenv("VITE_SUPABASE_URL") or "")
SUPABASE_ANON_KEY = _clean_env(os.getenv("SUPABASE_ANON_KEY") or os.getenv("VITE_SUPABASE_ANON_KEY") or "")
SUPABASE_SERVICE_KEY = _clean_env(os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv("SUPABASE_SERVICE_KEY") or "")

if SUPABASE_URL and not SUPABASE_URL.startswith("http"):
    SUPABASE_URL = "https://" + SUPABASE_URL
if SUPABASE_URL.endswith("/"):
    SUPABASE_URL = SUPABASE_URL.rstrip("/")

# Stripe: clé secrète et secret webhook
STRIPE_SECRET_KEY = _clean_env(os.getenv("STRIPE_SECRET_KEY") or "")
STRIPE_WEBHOOK_SECRET = _clean_env(os.getenv("STRIPE_WEBHOOK_SECRET") or "")

# CORS: le checkout est appelé depuis le front (autre origine)
CORS_ORIGINS = _split_env("CORS_ORIGINS", "*")

# Checkout: URLs de retour fixes (pas d'open-redirect possible)
CHECKOUT_SUCCESS_URL = _clean_env(
    os.getenv("CHECKOUT_SUCCESS_URL") or "https://led-nabor.com/order-success?session_id={CHECKOUT_SESSION_ID}"
)
CHECKOUT_CANCEL_URL = _clean_env(os.getenv("CHECKOUT_CANCEL_URL") or "https://led-nabor.com/checkout")
CHECKOUT_LOCALE = _clean_env(os.getenv("CHECKOUT_LOCALE") or "en")
MERCHANT_LABEL = _clean_env(os.getenv("MERCHANT_LABEL") or "LED Nabor")
PAYMENT_CURRENCY = _clean_env(os.getenv("PAYMENT_CURRENCY") or "czk")
ALLOWED_SHIPPING_COUNTRIES = ["CZ", "SK", "DE", "AT", "PL", "HU"]


class CheckoutSettings:
    """
    Regroupe les constantes du checkout pour les injecter dans le service.
    Les valeurs par défaut viennent du module; les tests peuvent en passer d'autres.
    """

    def __init__(
        self,
        success_url: Optional[str] = None,
        cancel_url: Optional[str] = None,
        locale: Optional[str] = None,
        merchant_label: Optional[str] = None,
        allowed_countries: Optional[List[str]] = None,
        currency: Optional[str] = None,
    ):
        self.success_url = success_url or CHECKOUT_SUCCESS_URL
        self.cancel_url = cancel_url or CHECKOUT_CANCEL_URL
        self.locale = locale or CHECKOUT_LOCALE
        self.merchant_label = merchant_label or MERCHANT_LABEL
        self.allowed_countries = list(allowed_countries or ALLOWED_SHIPPING_COUNTRIES)
        self.currency = currency or PAYMENT_CURRENCY
