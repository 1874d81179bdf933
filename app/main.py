"""
Main application file
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes.api.intentions import router as intentions_router
from app.api.routes.api.members import router as members_router
from app.api.routes.api.referrals import router as referrals_router
from app.config import get_settings
from app.core.exceptions import MembershipError
from app.db import session
from app.models import Base

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


# --- Lifespan handler ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    try:
        if settings.create_tables_on_startup and session.engine is not None:
            logger.info("Creating database tables…")
            async with session.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables ready.")

        yield

    finally:
        # --- Shutdown cleanup ---
        if session.engine is not None:
            try:
                await session.engine.dispose()
                logger.info("Database engine disposed.")
            except Exception as e:
                logger.error(f"Error disposing database engine: {e}")


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],  # Allow all methods including OPTIONS for preflight
    allow_headers=["*"],
)


# --- Error mapping ---
@app.exception_handler(MembershipError)
async def membership_error_handler(request: Request, exc: MembershipError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = sorted({
        ".".join(str(part) for part in err["loc"] if part not in ("body", "query", "path"))
        for err in exc.errors()
    })
    return JSONResponse(
        status_code=400,
        content={"detail": f"Missing or invalid fields: {', '.join(f for f in fields if f)}"},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/")
def root():
    return {"status": "ok"}


app.include_router(
    intentions_router,
    prefix="/api/intentions",
    tags=["intentions"],
)

app.include_router(
    members_router,
    prefix="/api/members",
    tags=["members"],
)

app.include_router(
    referrals_router,
    prefix="/api/referrals",
    tags=["referrals"],
)
