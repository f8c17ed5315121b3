# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the weather API:
# - test_models.py: WeatherRecord / ForecastDay normalization and display
# - test_services.py: Lookup, history and favorites business logic
# - test_routes.py: HTTP endpoints, route ordering and error envelopes
# - test_openweather_client.py: Upstream client (respx-mocked httpx)
# - test_supabase_client.py: Document store (mocked Supabase client)
# - test_exceptions.py, test_utils.py: Error translation and input parsing
#
# Run tests with: pytest
# =============================================================================
