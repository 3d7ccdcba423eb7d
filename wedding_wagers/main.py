"""
FastAPI main application
Wedding Wagers - guests bet on the big day's moments, admins pick the winners

Modular architecture with separated API routers in wedding_wagers/api/:
- health.py: Health check and system status
- auth.py: Sign-up, e-mail verification, sign-in/sign-out
- bets.py: Bets, answer submission and public winners
- admin.py: Bet management, answer key, find/publish winners
- roles.py: Super-admin grant/revoke of the admin role

All routers access shared state via the wedding_wagers.state module.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from datetime import timedelta
import logging

from wedding_wagers import state
from wedding_wagers.bets_loader import load_bets
from wedding_wagers.config import config_path_from_env, load_config
from wedding_wagers.errors import StoreError, WagerError
from wedding_wagers.identity import IdentityProvider
from wedding_wagers.store import BETS, HOMEPAGE_WINNERS

# Import all API routers
from wedding_wagers.api import health, auth, bets, admin, roles


# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def seed_bets(path: str) -> int:
    """Insert the seed bets into an empty bets collection"""
    if state.STORE.count(BETS) > 0:
        return 0
    seeded = load_bets(path)
    for bet in seeded:
        state.STORE.insert(BETS, bet.to_document())
    return len(seeded)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    # Startup: load configuration and fresh state
    config_path = config_path_from_env()
    try:
        config = load_config(config_path)
    except Exception as e:
        logger.error(f"❌ Failed to load config {config_path}: {e}")
        raise

    state.reset()
    state.CONFIG = config
    state.IDENTITY = IdentityProvider(session_ttl=timedelta(minutes=config.session_ttl_minutes))
    logging.getLogger().setLevel(config.log_level.upper())

    if not config.super_admin_email:
        logger.warning("No super_admin_email configured; admin roles cannot be granted")

    if config.seed_bets_path:
        try:
            count = seed_bets(config.seed_bets_path)
            logger.info(f"✅ Seeded {count} bets from {config.seed_bets_path}")
        except FileNotFoundError:
            logger.warning(f"Seed bets file not found: {config.seed_bets_path}")

    cancels = [
        state.STORE.subscribe(
            HOMEPAGE_WINNERS,
            lambda docs: logger.info(f"Homepage winners now: {[d['userName'] for d in docs]}")
        ),
        state.STORE.subscribe(BETS, lambda docs: logger.info(f"{len(docs)} bets open")),
        state.IDENTITY.on_auth_state_changed(
            lambda uid, ctx: logger.info(f"Auth state changed for {uid}: {'signed in' if ctx else 'signed out'}")
        ),
    ]
    logger.info("✅ Server started")

    yield

    # Shutdown
    for cancel in cancels:
        cancel()
    logger.info("🛑 Server shutting down")


# Create FastAPI app
app = FastAPI(
    title="Wedding Wagers",
    description="Wedding-party prediction game with admin-curated winners",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware (allow all origins for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==================== ERROR HANDLERS ====================

@app.exception_handler(WagerError)
async def wager_error_handler(request: Request, exc: WagerError):
    if isinstance(exc, StoreError):
        logger.error(f"❌ Store error on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"detail": StoreError.GENERIC_MESSAGE})

    logger.warning(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error(
        f"❌ ERROR in {request.method} {request.url.path}\n"
        f"Error: {str(exc)}\n"
        f"Error Type: {type(exc).__name__}",
        exc_info=exc
    )
    return JSONResponse(status_code=500, content={"detail": StoreError.GENERIC_MESSAGE})


# ==================== INCLUDE ROUTERS ====================

# Health check (GET /)
app.include_router(health.router)

# Auth endpoints (POST /auth/sign-up, /auth/sign-in, ...)
app.include_router(auth.router)

# Guest endpoints (GET /bets, POST /answers, GET /winners)
app.include_router(bets.router)

# Admin endpoints (POST /admin/bets, /admin/answer-key, /admin/find-winner, ...)
app.include_router(admin.router)

# Role endpoints (POST /roles/grant-admin, /roles/revoke-admin)
app.include_router(roles.router)


# ==================== RUN SERVER ====================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
