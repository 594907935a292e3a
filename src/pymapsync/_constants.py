"""Internal constants shared across the library."""

DEFAULT_ZOOM = 14
ICON_MIN_ZOOM = 10

# ------------------------------------------------------------------
# Route line style (fixed, not caller configurable)
# ------------------------------------------------------------------

ROUTE_LINE_COLOR = "#FF6F4D"
ROUTE_LINE_WIDTH = 5

# ------------------------------------------------------------------
# Geolocation
# ------------------------------------------------------------------

GEOLOCATION_PERMISSION = "geolocation"
POSITION_MAXIMUM_AGE_S = 60.0
POSITION_TIMEOUT_S = 50.0

#: Workflow stage in which a fresh position fix recenters the camera.
DRAFT_STAGE = "draft"

GOOGLE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
GEOCODER_OK = "OK"
GEOCODER_ZERO_RESULTS = "ZERO_RESULTS"
