"""Internal constants shared across the library."""

FEED_BASE_URL = "https://api.adsb.lol"
ENRICHMENT_BASE_URL = "https://www.airliners.net"
GEOLOCATION_URL = "https://ipapi.co/json/"
USER_AGENT = "Mozilla/5.0 (compatible; pyskytrack)"

# adsb.lol rejects point queries beyond this radius (nautical miles).
MAX_FEED_RADIUS_NM = 250.0
RADIUS_ZOOM_REFERENCE = 10

DEFAULT_CENTER: tuple[float, float] = (51.505, -0.09)
DEFAULT_ZOOM = 5
INITIAL_ZOOM = 10
MIN_ZOOM = 0
MAX_ZOOM = 19

POLL_INTERVAL_SECONDS = 2.0
REQUEST_TIMEOUT_SECONDS = 10.0

UNKNOWN_AUTHOR = "Unknown"

# airliners.net search result selectors.
PHOTO_SELECTOR = "div.ps-v2-results-col-photo img.lazy-load"
AUTHOR_SELECTOR = "a.ua-name-content"
