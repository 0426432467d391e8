"""
Service configuration — loads endpoints and tuning from .env file.
"""

import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()

# ─────────────────────────────────────────────
# Backend services
# ─────────────────────────────────────────────
CATALOG_API_URL = os.getenv("CATALOG_API_URL", "http://localhost:5101/api/v1/catalog")
CATALOG_AI_API_URL = os.getenv("CATALOG_AI_API_URL", "http://localhost:5102/api/v1/catalog")
BASKET_API_URL = os.getenv("BASKET_API_URL", "http://localhost:5103/api/v1/basket")
CLASSIFIER_API_URL = os.getenv("CLASSIFIER_API_URL", "http://localhost:5104/api/v1/classify")

# Public host that replaces internal hosts in product picture URLs.
# Empty means picture URLs are passed through untouched.
PICTURE_BASE_URL = os.getenv("PICTURE_BASE_URL", "")

# ─────────────────────────────────────────────
# API Defaults
# ─────────────────────────────────────────────
CATALOG_PAGE_SIZE = int(os.getenv("CATALOG_PAGE_SIZE", 10))
REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", 30))  # seconds
AUTH_SESSION_TTL_SECONDS = int(os.getenv("AUTH_SESSION_TTL_SECONDS", 3600))

# Channels that can't render markdown in card text
PLAIN_TEXT_CHANNELS = {
    c.strip().lower()
    for c in os.getenv("PLAIN_TEXT_CHANNELS", "skype").split(",")
    if c.strip()
}

# ─────────────────────────────────────────────
# App Settings
# ─────────────────────────────────────────────
PORT = int(os.getenv("PORT", 5009))
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# ─────────────────────────────────────────────
# HTTP Headers
# ─────────────────────────────────────────────
DEFAULT_HEADERS = {
    "User-Agent": "catalog-chat/1.0",
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "en-US,en;q=0.9",
}
