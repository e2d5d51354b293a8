import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import app.models  # ensure models are registered
from app.core.config import CORS_ORIGINS, SEED_ON_STARTUP
from app.core.errors import LedgerError, ledger_error_handler
from app.core.logging_config import setup_logging
from app.utils.database import engine, Base
from app.initial_data import init_seed

from app.routers import (
    auth_router,
    members_router,
    cotisations_router,
    loans_router,
    sanctions_router,
    aids_router,
    savings_router,
    settings_router,
    reports_router,
    sport_router,
    meetings_router,
)

setup_logging()
logger = logging.getLogger("app.main")

app = FastAPI(title="E2D Ledger Backend API", version="1.0")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# service errors -> {"detail": ...}, same body as HTTPException
app.add_exception_handler(LedgerError, ledger_error_handler)

# Routers
app.include_router(auth_router.router)
app.include_router(members_router.router)
app.include_router(cotisations_router.router)
app.include_router(loans_router.router)
app.include_router(sanctions_router.router)
app.include_router(aids_router.router)
app.include_router(savings_router.router)
app.include_router(settings_router.router)
app.include_router(reports_router.router)
app.include_router(sport_router.router)
app.include_router(meetings_router.router)


@app.on_event("startup")
def on_startup():
    # DEV ONLY – schema migrations are not managed here
    Base.metadata.create_all(bind=engine)

    if SEED_ON_STARTUP:
        logger.info("running initial database seeding")
        init_seed()


@app.get("/")
def root():
    return {"message": "E2D Ledger Backend is running"}
