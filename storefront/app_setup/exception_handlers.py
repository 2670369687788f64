"""
Gestionnaires d'exceptions.
- HTTPException: corps {"error": detail} (même forme que les réponses du checkout).
- AppError non interceptée: classée par le gestionnaire d'erreurs de l'app,
  400 si non retryable et de sévérité < high, 500 sinon.
"""
import logging
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from storefront.errors import AppError, ErrorHandler, SEVERITIES, SEVERITY_HIGH

logger = logging.getLogger(__name__)

def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_as_json(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(AppError)
    async def app_error_as_json(request: Request, exc: AppError):
        handler = getattr(request.app.state, "error_handler", None) or ErrorHandler()
        app_error = handler.handle(exc)
        server_side = app_error.retryable or app_error.severity_rank() >= SEVERITIES.index(SEVERITY_HIGH)
        return JSONResponse(
            status_code=500 if server_side else 400,
            content={"error": app_error.message, "code": app_error.code, "retryable": app_error.retryable},
        )
