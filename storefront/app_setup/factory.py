"""
Factory d'application recommandée pour les entrypoints (ex: storefront.asgi).
Ordonne les étapes d'initialisation de manière lisible et testable.
"""
from fastapi import FastAPI
from .lifespan import init_app_state, lifespan
from .middlewares import register_basic_middlewares, register_no_cache_middleware
from .exception_handlers import register_exception_handlers
from .routers import register_routers

def create_app() -> FastAPI:
    """
    Construit l'app FastAPI avec le lifespan et enregistre:
      - middlewares (CORS, no-cache checkout)
      - gestionnaires d'exceptions
      - tous les routers (checkout, warranty, health)
    L'état par processus (gestionnaire d'erreurs, cache garanties) est créé
    immédiatement pour que l'app fonctionne aussi sans lifespan (TestClient simple).
    """
    app = FastAPI(title="LED Storefront API", lifespan=lifespan)
    init_app_state(app)
    register_basic_middlewares(app)
    register_no_cache_middleware(app)
    register_exception_handlers(app)
    register_routers(app)
    return app
