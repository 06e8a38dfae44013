import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from .api import application as application_api
from .api import auth as auth_api
from .api import job as job_api
from .api import users as users_api
from .config import FRONTEND_ORIGINS, LOG_LEVEL
from .database import engine, init_db
from .utils.error_handlers import register_exception_handlers

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Job Board API")

app.include_router(auth_api.router)
app.include_router(job_api.router)
app.include_router(application_api.router)
app.include_router(users_api.router)

register_exception_handlers(app)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "Backend running",
        "service": "Job Board API"
    }


app.add_middleware(
    CORSMiddleware,
    allow_origins=FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
)


@app.on_event("startup")
def on_startup() -> None:
    try:
        init_db()
        app.state.db_init_error = None
    except Exception as e:
        # Keep booting; /db/health reports the failure.
        logger.exception("Database initialization failed: %s", e)
        app.state.db_init_error = str(e)


@app.get("/db/health")
def db_health():
    if getattr(app.state, "db_init_error", None):
        raise HTTPException(
            status_code=503,
            detail=f"DB init failed: {app.state.db_init_error}",
        )

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        raise HTTPException(
            status_code=503,
            detail=f"DB connection failed: {e}",
        )

    return {"status": "ok"}
