"""
Middlewares transverses de l'application.
- register_basic_middlewares: CORS (le front est servi depuis une autre origine).
- register_no_cache_middleware: empêche la mise en cache des réponses de l'API checkout.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from storefront.config import CORS_ORIGINS

def register_basic_middlewares(app: FastAPI) -> None:
    """
    CORSMiddleware: autorise les origines définies (CORS_ORIGINS); le preflight expose POST, OPTIONS.
    Les GET (garanties, health) sont des requêtes simples, sans preflight.
    Pas de cookies: l'authentification est gérée par le fournisseur d'identité.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

def register_no_cache_middleware(app: FastAPI) -> None:
    """
    Une session Stripe est propre à une tentative: jamais de cache sur /api/v1/checkout.
    """
    @app.middleware("http")
    async def no_cache_for_checkout(request: Request, call_next):
        response = await call_next(request)
        if request.url.path.startswith("/api/v1/checkout"):
            response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
            response.headers["Pragma"] = "no-cache"
        return response
