import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from orderdesk.api.api_v1.api import api_router
from orderdesk.core.config import settings
from orderdesk.core.errors import register_exception_handlers
from orderdesk.core.logging_config import setup_logging, get_logger
from orderdesk.db.init_db import ensure_tables_exist, seed_reference_data
from orderdesk.db.session import SessionLocal
from orderdesk.services.scheduler import init_scheduler, shutdown_scheduler

setup_logging(settings.LOG_LEVEL, settings.LOG_DIR)
logger = get_logger(__name__)
http_logger = get_logger("orderdesk.http")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown"""
    logger.info("🚀 Starting up...")

    await ensure_tables_exist()
    logger.info("📊 Database tables ready")

    async with SessionLocal() as db:
        created = await seed_reference_data(db)
    if created["statuses"] or created["order_types"]:
        logger.info(f"📦 Seeded {created['statuses']} statuses and {created['order_types']} order types")
    if created["admin"]:
        logger.info(f"👤 Created admin user {settings.FIRST_ADMIN_EMAIL}")

    init_scheduler()
    yield
    logger.info("🛑 Shutting down...")
    shutdown_scheduler()


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    description="Warehouse order management API",
    lifespan=lifespan
)

register_exception_handlers(app)

if settings.BACKEND_CORS_ORIGINS:
    logger.info(f"CORS origins: {settings.BACKEND_CORS_ORIGINS}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - started) * 1000
    line = f"{request.method} {request.url.path} {response.status_code} {duration_ms:.1f}ms"
    if response.status_code >= 500:
        http_logger.error(line)
    elif response.status_code >= 400:
        http_logger.warning(line)
    else:
        http_logger.info(line)
    return response


app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/")
async def root():
    return {"message": settings.PROJECT_NAME}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000, log_level="info")
