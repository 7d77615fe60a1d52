from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
import time
import logging

from config.settings import settings
from core.logger import setup_logging
from database.postgres import engine, get_db, init_db

# Import routers
from api.router.auth import auth_router
from api.router.notifications import notifications_router
from api.router.metrics import metrics_router

# Import scripts
from scripts.bootstrap_admin import bootstrap_admin

# Import scheduler
from utils.scheduler import init_scheduler, start_scheduler, shutdown_scheduler

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Rental Management API",
    description="Apartments, tenants, rent payments and owner notifications",
    version="1.0.0",
)

origins = [
    "http://localhost:3000",
    "http://localhost:8080",
    "http://localhost:5173",
]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(notifications_router, prefix="/api/v1")
app.include_router(metrics_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup():
    """
    Startup tasks:
    - Configure logging
    - Create tables and bootstrap the admin user
    - Start the notification scheduler
    """
    setup_logging(serialize=settings.ENV != "development")
    logger.info("=" * 60)
    logger.info("APPLICATION STARTING UP")
    logger.info("=" * 60)

    init_db()

    db = next(get_db())
    try:
        bootstrap_admin(db)
    finally:
        db.close()

    if settings.ENABLE_SCHEDULER:
        init_scheduler()
        start_scheduler()
        logger.info("✓ Notification scheduler started")
    else:
        logger.info("Notification scheduler disabled (ENABLE_SCHEDULER=false)")

    logger.info("=" * 60)
    logger.info("APPLICATION READY")
    logger.info("=" * 60)


@app.on_event("shutdown")
async def on_shutdown():
    logger.info("Application shutting down...")
    shutdown_scheduler()
    engine.dispose()
    logger.info("Shutdown completed")


@app.get("/health")
@app.get("/api/v1/health")
def health_check():
    """
    Health check endpoint for load balancers

    Returns:
        dict: Health status
    """
    health = {
        "status": "healthy",
        "timestamp": time.time(),
    }

    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        health["database"] = "connected"
    except SQLAlchemyError as e:
        logger.error(f"Health check database error: {str(e)}")
        health["database"] = "error"
        health["status"] = "unhealthy"

    status_code = 200 if health["status"] == "healthy" else 503
    return JSONResponse(content=health, status_code=status_code)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.ENV == "development")
