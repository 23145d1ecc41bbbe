"""Internal constants shared across the library."""

# ------------------------------------------------------------------
# Flat-earth approximation used for geofence rendering
# ------------------------------------------------------------------

KM_PER_DEGREE = 111.0
DEFAULT_POINT_COUNT = 64
MIN_POINT_COUNT = 3

# cos(lat) reaches zero at the poles; longitude scaling is undefined there.
MAX_ABS_LATITUDE = 89.9

EARTH_RADIUS_KM = 6371.0

# ------------------------------------------------------------------
# Motion simulator
# ------------------------------------------------------------------

DEFAULT_TICK_INTERVAL = 3.0

# Full width of each uniform delta: delta = (rand() - 0.5) * range.
LAT_LNG_DELTA_RANGE = 0.002
HEADING_DELTA_RANGE = 20.0
SPEED_DELTA_RANGE = 10.0
