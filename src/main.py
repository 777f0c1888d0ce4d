from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
import logging

from database import Base, engine, run_migrations, check_migrations
from config import settings
from api.payments import router as payments_router
from api.transactions import router as transactions_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logging.getLogger("urllib3").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Point-of-sale transaction orchestration and gateway reconciliation",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Run migrations on startup
@app.on_event("startup")
async def startup_event():
    """Run database migrations on application startup"""
    try:
        if check_migrations():
            logger.info("Running database migrations...")
            run_migrations()
            logger.info("Database migrations completed")

        # Create tables (for development only - migrations handle production)
        if settings.DEBUG:
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables created (development mode)")

    except Exception as e:
        logger.error(f"Startup error: {e}")
        raise

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )

@app.get("/health")
async def health_check():
    """Health check endpoint with database status"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))

        return {
            "status": "healthy",
            "service": settings.APP_NAME,
            "database": "connected",
            "version": "1.0.0"
        }
    except Exception as e:
        return {
            "status": "unhealthy",
            "service": settings.APP_NAME,
            "database": "disconnected",
            "error": str(e)
        }

# Include routers
app.include_router(payments_router, prefix=settings.API_PREFIX)
app.include_router(transactions_router, prefix=settings.API_PREFIX)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
