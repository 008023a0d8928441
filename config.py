"""
AQHI Lab - Configuration
Central configuration for monitoring stations, upstream endpoints and cache.
"""

from dataclasses import dataclass
from typing import Dict
import logging
import os
import tempfile

from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_log_level(name: str, default: str = "INFO") -> str:
    raw = os.environ.get(name, "").strip().upper()
    if raw and isinstance(logging.getLevelName(raw), int):
        return raw
    return default


def _env_cache_dir(name: str) -> str:
    return os.environ.get(name, "").strip() or tempfile.gettempdir()


# ============================================================================
# STATION CONFIGURATION
# ============================================================================

@dataclass(frozen=True)
class Coordinates:
    """Station location, GeoJSON order (longitude first)."""
    longitude: float
    latitude: float


# Keyed by the upstream StationNameEN value (exact match).
COORDINATES: Dict[str, Coordinates] = {
    "Southern": Coordinates(114.16014, 22.247461),
    "North": Coordinates(114.128244, 22.496697),
    "Kwun Tong": Coordinates(114.231174, 22.309625),
    "Tseung Kwan O": Coordinates(114.259561, 22.317642),
    "Tuen Mun": Coordinates(113.976728, 22.391143),
    "Tung Chung": Coordinates(113.943659, 22.288889),
    "Eastern Air": Coordinates(114.219372, 22.282886),
    "Tap Mun": Coordinates(114.360719, 22.471317),
    "Kwai Chung": Coordinates(114.129601, 22.357104),
    "Yuen Long": Coordinates(114.022649, 22.445155),
    "Sha Tin": Coordinates(114.184532, 22.376281),
    "Sham Shui Po": Coordinates(114.159109, 22.330226),
    "Tai Po": Coordinates(114.16457, 22.45096),
    "Mong Kok": Coordinates(114.168272, 22.322611),
    "Central/Western": Coordinates(114.144421, 22.284891),
    "Central": Coordinates(114.158127, 22.281815),
    "Causeway Bay": Coordinates(114.18509, 22.280133),
    "Tsuen Wan": Coordinates(114.114535, 22.371742),
}

# ============================================================================
# API ENDPOINTS
# ============================================================================

# Past 24h pollutant concentrations per station
AQHI_POLLUTANT_URL = "https://www.aqhi.gov.hk/js/data/past_24_pollutant.js"
AQHI_POLLUTANT_VARIABLE = "station_24_data"

# AQHI report + forecast page
AQHI_FORECAST_URL = "https://www.aqhi.gov.hk/js/data/forecast_aqhi.js"
AQHI_REPORT_VARIABLE = "aqhi_report"
AQHI_FORECAST_VARIABLE = "aqhi_forecast"

# ============================================================================
# CACHE CONFIGURATION
# ============================================================================

CACHE_TTL_SECONDS = _env_int("AQHI_CACHE_TTL_SECONDS", 300)
CACHE_DIR = _env_cache_dir("AQHI_CACHE_DIR")
CACHE_FILE_PREFIX = "aqhi_cache_"

# ============================================================================
# SERVER CONFIGURATION
# ============================================================================

PROXY_PORT = _env_int("AQHI_PROXY_PORT", 8080)
FEATURES_API_PORT = _env_int("FEATURES_API_PORT", 1234)
LOG_LEVEL = _env_log_level("AQHI_LOG_LEVEL")
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# ============================================================================
# FEATURES API SEED
# ============================================================================

# Point assigned to every feature created through the API
DEFAULT_FEATURE_POINT = Coordinates(113.0, 22.0)

SEED_STATION_NAME = "Chek Lap Kok"
SEED_STATION_POINT = Coordinates(113.9219444, 22.3094444)
SEED_AIR_TEMPERATURE = 27.3
