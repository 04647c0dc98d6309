from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, Optional

# --- Configuration ---
API_BASE_URL = "https://newsapi.org/v2"
EVERYTHING_URL = f"{API_BASE_URL}/everything"
TOP_HEADLINES_URL = f"{API_BASE_URL}/top-headlines"
HTTP_TIMEOUT = 15

PAGE_SIZE = 9
# NewsAPI only serves the first 100 results of any query on the free plan
ACCESSIBLE_CEILING = 100
MIN_QUERY_LENGTH = 2
FALLBACK_QUERY = "latest"

CATEGORIES = (
    "business",
    "entertainment",
    "general",
    "health",
    "science",
    "sports",
    "technology",
)

PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/400x200?text=No+Image"

CONFIG_PATH = os.path.expanduser("~/.config/news-search/config.json")
API_KEY_ENV = "NEWSAPI_KEY"

REQUEST_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:115.0) "
        "Gecko/20100101 Firefox/115.0"
    )
}

DEFAULT_CONFIG: Dict[str, Any] = {
    "theme": "light",
}

# --- Logging ---
logger = logging.getLogger("news_search")


def setup_logging(debug: bool = False) -> Optional[str]:
    """Configure logging."""
    if not debug:
        logging.basicConfig(level=logging.CRITICAL, handlers=[logging.NullHandler()])
        return None

    ts = datetime.now().strftime("%Y%m%dT%H%M%S")
    pid = os.getpid()
    debug_path = f"/tmp/news_search_debug_{ts}_{pid}.log"

    logging.basicConfig(
        level=logging.DEBUG,
        filename=debug_path,
        filemode="a",
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    logger.debug("Debug logging enabled to %s", debug_path)
    return debug_path


def ensure_config_file_exists(path: str = CONFIG_PATH) -> None:
    """Write the default config file if the user's config file is not found."""
    if os.path.exists(path):
        return
    logger.info("Config file not found at %s, creating default.", path)
    save_config(dict(DEFAULT_CONFIG), path)


def load_config(path: str = CONFIG_PATH) -> Dict[str, Any]:
    """Load the main configuration file."""
    ensure_config_file_exists(path)
    try:
        with open(path, "r") as f:
            config = json.load(f)
    except (IOError, json.JSONDecodeError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
        return dict(DEFAULT_CONFIG)
    if not isinstance(config, dict):
        logger.error("Ignoring malformed config in %s", path)
        return dict(DEFAULT_CONFIG)
    logger.info("Loaded config from %s", path)
    return config


def save_config(config: Dict[str, Any], path: str = CONFIG_PATH) -> None:
    """Save the main configuration file."""
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w") as f:
            json.dump(config, f, indent=2)
        logger.info("Saved config to %s", path)
    except (IOError, OSError) as e:
        logger.error("Failed to save config to %s: %s", path, e)


def resolve_api_key(
    cli_value: Optional[str], config: Dict[str, Any]
) -> Optional[str]:
    """Return the API key from the command line, environment or config, in that order."""
    for candidate in (cli_value, os.environ.get(API_KEY_ENV), config.get("api_key")):
        if candidate and candidate.strip():
            return candidate.strip()
    return None
