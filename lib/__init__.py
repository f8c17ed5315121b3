# =============================================================================
# lib/ - Standalone Client Modules
# =============================================================================
# This package contains the external collaborators:
# - openweather_client.py: Async OpenWeatherMap client (httpx)
# - supabase_client.py: Async Supabase document store wrapper
# - utils.py: Input parsing helpers (ids, coordinates)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.openweather_client import OpenWeatherClient, OpenWeatherError
from lib.supabase_client import DocumentStore, SupabaseClientError
from lib.utils import normalize_uuid, parse_coordinate

__all__ = [
    # Upstream
    "OpenWeatherClient",
    "OpenWeatherError",
    # Storage
    "DocumentStore",
    "SupabaseClientError",
    # Utils
    "normalize_uuid",
    "parse_coordinate",
]
