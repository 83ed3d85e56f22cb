"""
Presale tracker HTTP API.

Admin bootstrap/authentication plus the shared progress counter. Sync handlers run on the
server threadpool; the store is fetched per request through `get_store()` so tests can
swap it out.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict

from fastapi import Body, Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, StrictInt
from starlette.exceptions import HTTPException as StarletteHTTPException

from presale.api.config import load_server_config
from presale.auth.config import load_auth_config
from presale.auth.deps import require_admin_token
from presale.auth.local import (
    AdminNotInitializedError,
    InvalidPasswordError,
    PasswordPolicyError,
    authenticate_admin,
    initialize_admin,
)
from presale.auth.models import TokenClaims
from presale.auth.token import issue_token
from presale.storage.factory import get_store, reset_store

logger = logging.getLogger(__name__)


class ProgressChangeRequest(BaseModel):
    number: StrictInt


app = FastAPI(title="Presale tracker")

app.add_middleware(
    CORSMiddleware,
    allow_origins=load_server_config().cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def _http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def _validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected request body: %s", exc.errors())
    return JSONResponse(status_code=400, content={"message": "Invalid request body"})


@app.on_event("shutdown")
def _shutdown_close_store() -> None:
    reset_store()


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming HTTP requests."""
    start_time = time.time()
    logger.debug("%s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.debug("%s %s - %d (%.3fs)", request.method, request.url.path, response.status_code, process_time)
        return response
    except Exception as e:
        process_time = time.time() - start_time
        logger.exception("%s %s - ERROR after %.3fs: %s", request.method, request.url.path, process_time, str(e))
        raise


@app.get("/healthz")
def healthz() -> Dict[str, Any]:
    return {"ok": True}


@app.get("/api/verify-token")
def verify_token(_claims: TokenClaims = Depends(require_admin_token)) -> Dict[str, Any]:
    return {"message": "Token valid"}


@app.post("/api/authenticate")
def authenticate(credentials: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    """
    Exchange the admin password for a one hour bearer token.
    No lockout: attempts are unlimited.
    """
    try:
        authenticate_admin(get_store(), credentials.get("password"))
        token = issue_token(load_auth_config())
    except PasswordPolicyError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (AdminNotInitializedError, InvalidPasswordError) as e:
        raise HTTPException(status_code=401, detail=str(e))
    except Exception:
        logger.exception("Auth error")
        raise HTTPException(status_code=500, detail="Server error")
    return {"token": token}


@app.get("/api/init-admin", response_class=PlainTextResponse)
def init_admin() -> PlainTextResponse:
    """
    Operational endpoint: (re)set the admin password from ADMIN_PASSWORD.
    Takes no input from the caller.
    """
    try:
        initialize_admin(get_store(), load_auth_config().admin_password)
    except PasswordPolicyError as e:
        return PlainTextResponse(str(e), status_code=400)
    except Exception:
        logger.exception("Admin initialization failed")
        return PlainTextResponse("Failed to initialize admin", status_code=500)
    return PlainTextResponse("Admin created or updated")


@app.post("/api/incrementProgress")
def increment_progress(
    req: ProgressChangeRequest, _claims: TokenClaims = Depends(require_admin_token)
) -> Dict[str, Any]:
    try:
        value = get_store().add_progress(req.number)
    except Exception:
        logger.exception("Increment failed (number=%s)", req.number)
        raise HTTPException(status_code=400, detail="Increment failed")
    return {"message": "Incremented successfully", "value": value}


@app.post("/api/decrementProgress")
def decrement_progress(
    req: ProgressChangeRequest, _claims: TokenClaims = Depends(require_admin_token)
) -> Dict[str, Any]:
    try:
        value = get_store().add_progress(-req.number)
    except Exception:
        logger.exception("Decrement failed (number=%s)", req.number)
        raise HTTPException(status_code=400, detail="Decrement failed")
    return {"message": "Decremented successfully", "value": value}


@app.get("/api/getProgress")
def get_progress() -> Dict[str, Any]:
    try:
        value = get_store().get_progress()
    except Exception:
        logger.exception("Failed to fetch progress value")
        raise HTTPException(status_code=500, detail="Failed to fetch value")
    return {"value": value if value is not None else 0}


def run(host: str = "0.0.0.0", port: int | None = None) -> None:
    # Configure logging for the application
    log_level = os.getenv("LOG_LEVEL", "info").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.setLevel(getattr(logging, log_level, logging.INFO))

    cfg = load_server_config()
    if cfg.production:
        logger.info("APP_ENV=production: not binding a socket; serve presale.api.server:app from the ASGI host")
        return

    import uvicorn

    # Map Python logging levels to uvicorn log levels
    uvicorn_log_level = (
        log_level.lower() if log_level.lower() in ["critical", "error", "warning", "info", "debug", "trace"] else "info"
    )

    listen_port = port if port is not None else cfg.port
    logger.info("Starting presale API on %s:%d (log_level=%s)", host, listen_port, log_level)
    uvicorn.run(app, host=host, port=listen_port, log_level=uvicorn_log_level)
