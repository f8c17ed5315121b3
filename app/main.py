# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the weather API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.exceptions import (
    WeatherAPIException,
    http_exception_handler,
    library_exception_handler,
    unexpected_exception_handler,
    validation_exception_handler,
    weather_exception_handler,
)
from app.routers import health, weather
from lib.openweather_client import OpenWeatherClient, OpenWeatherError
from lib.supabase_client import DocumentStore, SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: open the upstream HTTP client and the storage client
    - Shutdown: close both, including when storage fails to connect
    """
    logger.info(f"Starting weather API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    app.state.weather_client = OpenWeatherClient(
        api_key=settings.OPENWEATHER_API_KEY,
        base_url=settings.OPENWEATHER_BASE_URL,
        timeout=settings.OPENWEATHER_TIMEOUT,
        lang=settings.OPENWEATHER_LANG,
    )
    try:
        app.state.store = await DocumentStore.connect(
            settings.SUPABASE_URL,
            settings.SUPABASE_SERVICE_KEY,
        )
        try:
            yield
        finally:
            logger.info("Shutting down weather API")
            await app.state.store.close()
    finally:
        await app.state.weather_client.close()


# Create FastAPI application
app = FastAPI(
    title="SkyCache Weather API",
    description="""
## Weather lookups with search history and favorites

Proxies OpenWeatherMap and keeps the last searches and a list of favorite
cities in Supabase. Every response is JSON with a `success` flag; failures
carry an `error` message.

### Quick Start

```bash
curl http://localhost:5000/api/weather/Mumbai?units=metric
curl "http://localhost:5000/api/weather/current?lat=19.07&lon=72.87"
curl http://localhost:5000/api/weather/forecast/Mumbai
curl -X POST http://localhost:5000/api/weather/favorites \\
  -H "Content-Type: application/json" -d '{"city": "Pune"}'
curl http://localhost:5000/api/weather/history
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Weather",
            "description": "Current weather, forecast, favorites and search history",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(WeatherAPIException)
async def handle_weather_exception(request: Request, exc: WeatherAPIException):
    return await weather_exception_handler(request, exc)


@app.exception_handler(OpenWeatherError)
async def handle_upstream_exception(request: Request, exc: OpenWeatherError):
    return await library_exception_handler(request, exc)


@app.exception_handler(SupabaseClientError)
async def handle_storage_exception(request: Request, exc: SupabaseClientError):
    return await library_exception_handler(request, exc)


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    return await http_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    return await unexpected_exception_handler(request, exc)


# =============================================================================
# Routers
# =============================================================================

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)

# Weather endpoints (fixed paths registered before /{city} inside the router)
app.include_router(
    weather.router,
    prefix="/api/weather",
    tags=["Weather"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "success": True,
        "name": "SkyCache Weather API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
