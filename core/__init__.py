# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the weather business logic:
# - models/: Pydantic record and forecast models
# - services/: Lookup, favorites and history operations
#
# Services receive their storage and upstream clients as constructor
# arguments, so they can be tested with in-memory fakes.
# =============================================================================
