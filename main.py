# main.py

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shopapp.api.main import api_router
from shopapp.core.config import settings
from shopapp.core.error_handlers import setup_error_handlers, add_request_id_middleware
from shopapp.core.infrastructure.rate_limiter import limiter
from shopapp.database.core import Base, SessionLocal, engine
from shopapp.database.seed import seed_sample_products
from shopapp.logging import logger

# Import models to ensure they are registered with SQLAlchemy
from shopapp.database import models  # noqa: F401


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    logger.info("Starting database initialization...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully")

    if settings.SEED_SAMPLE_DATA:
        db = SessionLocal()
        try:
            seed_sample_products(db)
        finally:
            db.close()

    logger.info("Application startup completed")
    yield
    logger.info("Application shutdown")


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan
)

app.state.limiter = limiter

# Set up error handlers
setup_error_handlers(app)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request ID middleware for better error tracking
app.middleware("http")(add_request_id_middleware)

app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    return {
        "message": "Shop Application API",
        "version": settings.API_VERSION,
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": settings.API_VERSION}


if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=False)
