from fastapi import FastAPI
from shortlink_app.config import settings
from shortlink_app.database.connection import init_db
from shortlink_app.logging_config import setup_logging
from shortlink_app.api.errors import register_error_handlers
from shortlink_app.api.v1 import admin, categories, urls, redirect

# Import models to ensure they're registered with Base
from shortlink_app.models import User, Category, ShortURL

setup_logging(level=settings.log_level, json_format=settings.log_json)

# Create database tables
init_db()

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="URL shortener with per-user categories, custom aliases and blacklisting",
    debug=settings.debug
)

register_error_handlers(app)


@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}




######## Include routers
app.include_router(urls.router, prefix="/api/v1")
app.include_router(categories.router, prefix="/api/v1")
app.include_router(admin.router, prefix="/api/v1")
# Catch-all redirect must stay last
app.include_router(redirect.router)
