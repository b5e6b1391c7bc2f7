# samyukta/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from samyukta.api.v1.api import api_router
from samyukta.core.config import settings
from samyukta.core.limiter import limiter
from samyukta.db.base_class import Base
from samyukta.db.session import engine
from samyukta.middleware.error_handler import register_exception_handlers

import samyukta.models  # noqa: F401  registers every table on Base.metadata

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info(f"Starting Samyukta registration service (env={settings.ENV})")
    if settings.AUTO_CREATE_TABLES:
        # Local convenience only; deployments run `alembic upgrade head`
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables checked and created if necessary")
    capacity = settings.capacity
    logger.info(
        f"Capacity: total={capacity.max_total}, cloud={capacity.max_cloud}, "
        f"ai={capacity.max_ai}, cybersecurity={capacity.max_cybersecurity}, "
        f"hackathon={capacity.max_hackathon}, pitch={capacity.max_pitch}, "
        f"direct join above {capacity.direct_join_threshold}"
    )
    yield
    logger.info("Shutting down Samyukta registration service")


app = FastAPI(
    title="Samyukta Registration Service",
    version="1.0.0",
    description="""
        Registration, slot accounting and on-site check-in for Samyukta.

        ## Features

        * **Slots**: live open/closed view of every workshop and competition track
        * **Registrations**: team registration, direct join, review
        * **QR identity**: signed per-participant QR codes
        * **Check-in**: meals, workshop attendance, competition check-in, accommodation
        * **Dashboard**: registration and attendance statistics

        ## Authentication

        Staff endpoints require a JWT via the `Authorization: Bearer <token>` header.
        """,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    return {"status": "Samyukta registration service is running"}
