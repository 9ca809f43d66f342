"""
Application Constants

This module contains all application-wide constants to avoid magic numbers
and improve maintainability.
"""

# Canvas defaults
DEFAULT_WIDTH_PX = 1000
DEFAULT_HEIGHT_PX = 500
DEFAULT_SCALE = 1.0
DEFAULT_BACKGROUND_RGBA = (0, 0, 0, 255)
DEFAULT_STROKE_RGBA = (255, 255, 255, 255)
STROKE_WIDTH_PX = 1

# Geographic window at scale 1.0.
# The longitude span follows the canvas aspect ratio so that a 2:1 canvas
# covers +/-0.2 degrees of longitude.
BASE_LATITUDE_HALF_SPAN_DEG = 0.06
BASE_LONGITUDE_HALF_SPAN_DEG = 0.2
BASE_ASPECT_RATIO = DEFAULT_WIDTH_PX / DEFAULT_HEIGHT_PX

# Track files
GPX_SUFFIX = ".gpx"
FIT_GZ_SUFFIX = ".fit.gz"
MIN_RENDERABLE_POINTS = 2
FIT_SEMICIRCLE_TO_DEG = 180.0 / 2**31

# Manifest (Strava bulk export layout)
MANIFEST_FILENAME = "activities.csv"
MANIFEST_FILENAME_HEADER = "Filename"
MANIFEST_CATEGORY_HEADER = "Activity Type"

# Progress reporting while reading many files
PROGRESS_EVERY_N_FILES = 10

# Parsed tracks held ahead of the drawing loop, per parser thread
TRACKS_IN_FLIGHT_PER_WORKER = 4

# Geocoding
NOMINATIM_SEARCH_URL = "https://nominatim.openstreetmap.org/search"
GEOCODER_USER_AGENT = "trackheat/0.1 (activity heatmap renderer)"
GEOCODER_TIMEOUT_SECONDS = 15

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
