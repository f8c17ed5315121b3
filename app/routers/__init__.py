# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - weather.py: Weather lookups, forecast, favorites and search history
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import weather

__all__ = [
    "health",
    "weather",
]
