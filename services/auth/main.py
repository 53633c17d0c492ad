"""
Auth Service
Handles: registration, login, token verification
Port: 8001

Credentials are held in memory for the lifetime of the process. Tokens are
HS256 JWTs signed with JWT_SECRET and expire one hour after issuance.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from .accounts import authenticate, normalize_email, register_account
from .config import Settings, load_settings
from .database import check_connection
from .exceptions import InvalidRequest, InvalidToken
from .models import (
    HealthResponse,
    ProfileResponse,
    TokenPayload,
    TokenResponse,
    UserLogin,
    UserRegister,
    VerifyResponse,
)
from .security import decode_token
from .store import CredentialStore

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str) -> None:
    resolved = getattr(logging, level.strip().upper() or "INFO", logging.INFO)
    logging.basicConfig(level=resolved, format=_LOG_FORMAT)


# ── Dependencies ──────────────────────────────────────────────────────────────

def get_store(request: Request) -> CredentialStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def require_claims(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> dict:
    if not authorization:
        raise InvalidToken("Authorization header required")
    return decode_token(authorization, settings.jwt_secret)


# ── Error envelope ────────────────────────────────────────────────────────────

async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_error(request: Request, exc: RequestValidationError):
    logger.debug("Rejected request body on %s: %s", request.url.path, exc.errors())
    return await http_error(request, InvalidRequest())


# ── App ───────────────────────────────────────────────────────────────────────

def create_app(settings: Optional[Settings] = None, store: Optional[CredentialStore] = None) -> FastAPI:
    settings = settings or load_settings()
    store = store if store is not None else CredentialStore()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if await run_in_threadpool(check_connection, settings.database_path):
            logger.info("Database reachable at %s", settings.database_path)
        logger.info("[auth-service] Started on port %d", settings.port)
        yield

    app = FastAPI(title="Auth Service", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_error)
    app.add_exception_handler(RequestValidationError, validation_error)

    # ── Endpoints ─────────────────────────────────────────────────────────────

    @app.post("/register", status_code=201, response_model=TokenResponse)
    async def register(user: UserRegister, store: CredentialStore = Depends(get_store)):
        message = await register_account(store, user.email, user.password)
        # "token" carries the confirmation for clients written against the
        # original response shape; "message" is the field to read.
        return {"token": message, "message": message}

    @app.post("/login", response_model=TokenResponse, response_model_exclude_none=True)
    async def login(
        user: UserLogin,
        store: CredentialStore = Depends(get_store),
        settings: Settings = Depends(get_settings),
    ):
        token = await authenticate(store, user.email, user.password, settings.jwt_secret)
        return {"token": token}

    @app.post("/verify", response_model=VerifyResponse)
    async def verify_token(body: TokenPayload, settings: Settings = Depends(get_settings)):
        """Validate a token's signature and expiry."""
        claims = decode_token(body.token, settings.jwt_secret)
        return {"valid": True, "sub": claims["sub"], "exp": int(claims["exp"])}

    @app.get("/me", response_model=ProfileResponse)
    async def me(claims: dict = Depends(require_claims), store: CredentialStore = Depends(get_store)):
        email = normalize_email(claims["sub"])
        async with store.lock:
            exists = store.contains(email)
        if not exists:
            raise InvalidToken("Account no longer exists")
        return {"email": email}

    @app.get("/health", response_model=HealthResponse)
    async def health(store: CredentialStore = Depends(get_store)):
        reachable = await run_in_threadpool(check_connection, settings.database_path)
        database = "ok" if reachable else "unreachable"
        return {"status": "ok", "service": "auth", "accounts": len(store), "database": database}

    return app


if __name__ == "__main__":
    import uvicorn

    _settings = load_settings()
    uvicorn.run(
        "services.auth.main:create_app",
        factory=True,
        host=_settings.host,
        port=_settings.port,
        log_level=_settings.log_level.lower(),
    )
