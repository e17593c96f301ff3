import logging
import os
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


def _int_env(name: str, default: int) -> int:
    configured = os.getenv(name)
    if not configured:
        return default
    try:
        return int(configured)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, configured, default)
        return default


def _optional_float_env(name: str) -> Optional[float]:
    configured = os.getenv(name)
    if not configured:
        return None
    try:
        return float(configured)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r", name, configured)
        return None


# Sleeper API
BASE_URL = os.getenv("SLEEPER_BASE_URL", "https://api.sleeper.app/v1")
USER_AGENT = os.getenv("SLEEPER_USER_AGENT", "Fantasy-Football-Assistant/1.0")
REQUEST_TIMEOUT = _optional_float_env("SLEEPER_REQUEST_TIMEOUT")  # None waits forever

# League Settings
LEAGUE_ID = os.getenv("SLEEPER_LEAGUE_ID", "")

# Cache freshness (in seconds)
CACHE_TTL = _int_env("SLEEPER_CACHE_TTL", 5 * 60)
PLAYERS_CACHE_TTL = _int_env("SLEEPER_PLAYERS_CACHE_TTL", 24 * 60 * 60)

# Application Settings
PORT = _int_env("PORT", 5000)
