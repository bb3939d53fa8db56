import logging

from fastapi import Depends, FastAPI
from consumer_integration.database import create_db_and_tables
from consumer_integration.config import settings
from consumer_integration.errors import register_exception_handlers
from consumer_integration.routes import (
    dev,
    health,
    orders,
    polling,
)
from consumer_integration.utils.token import require_api_token

from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Run DB creation ONLY in local
    if settings.env == "local":
        create_db_and_tables()
    logger.info(f"Consumer integration API started (env={settings.env})")
    yield

app = FastAPI(title="Consumer Integration API", lifespan=lifespan)
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

partner_auth = [Depends(require_api_token)]

app.include_router(polling.router, prefix="/api", tags=["Polling"], dependencies=partner_auth)
app.include_router(orders.router, prefix="/api/order", tags=["Orders"], dependencies=partner_auth)
app.include_router(health.router, prefix="/health", tags=["Health"])

if settings.env != "production":
    app.include_router(dev.router, prefix="/test", tags=["Test Harness"])

@app.get("/")
def root():
    return {
        "message": "Consumer Integration API",
        "version": "1.0.0",
        "api_endpoints": [
            "GET /api/polling",
            "GET /api/order/{order_id}",
            "POST /api/order/details",
            "POST /api/order/status",
        ],
        "health_endpoints": [
            "GET /health/check"
        ],
    }
