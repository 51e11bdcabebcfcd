"""
Konfiguration och konstanter för ruttritaren
"""

# Karta
DEFAULT_CENTER = [41.888, -87.626]  # Chicago
DEFAULT_ZOOM = 13
FIT_BOUNDS_PADDING = (40, 40)

# Startrutt när länken saknar waypoints (sluten slinga)
DEFAULT_WAYPOINTS = [
    (41.88674, -87.63139),
    (41.88254, -87.61512),
    (41.88358, -87.61291),
    (41.89288, -87.61375),
    (41.90286, -87.62348),
    (41.93251, -87.63172),
    (41.88674, -87.63139),
]

# Avstånd
EARTH_RADIUS_M = 6371000
METERS_PER_MILE = 1609.344

# Delningslänk (#wps=...)
HASH_PRECISION = 5  # ~1.1 m
DISTANCE_HINT_STEP = 10  # td avrundas till närmaste 10 m

# GPX-export
GPX_CREATOR = "TrailRouter-Lite"
GPX_TRACK_NAME = "TrailRouter-Lite Route"
GPX_FILENAME = "route.gpx"
GPX_MIME = "application/gpx+xml"

# Geokodning
NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"
GEOCODE_LIMIT = 5
GEOCODE_TIMEOUT = 10
USER_AGENT = "TrailRouterLite/1.0"

# Cache-inställningar
CACHE_TTL = 3600  # 1 timme

# Loggning
LOG_LEVEL = "INFO"
