"""Central configuration for the submission API.

Runtime settings live on a typed Settings object (pydantic-settings) so the API
can inject them; business constants stay module-level and can be overridden
through the environment.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Dict

from dotenv import load_dotenv, find_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables once for the whole app
load_dotenv(find_dotenv())


class Settings(BaseSettings):
    """Runtime settings for the API and its delivery/storage collaborators.

    Values are loaded from environment variables and optional .env files.
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    APP_NAME: str = "PVC Cabinets Haiti API"
    APP_VERSION: str = "1.0.0"
    ENV: str = "dev"

    # Outbound notifications: "log" only records them, "sendgrid" delivers them
    EMAIL_BACKEND: str = "log"
    SENDGRID_API_KEY: str = ""
    BUSINESS_EMAIL: str = "info@pvchaiti.com"
    SENDER_EMAIL: str = "noreply@pvchaiti.com"

    # Submission persistence: none, memory or sqlite
    SUBMISSION_STORE: str = "none"
    SUBMISSION_DB_PATH: str = os.path.join(
        os.path.dirname(os.path.dirname(__file__)), ".data", "submissions.sqlite3"
    )

    TIMEZONE: str = "America/Port-au-Prince"
    DEFAULT_LANGUAGE: str = "en"


@lru_cache
def get_settings() -> Settings:
    return Settings()


# Paths
PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))  # repo root
TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")
TRANSLATIONS_DIR = os.path.join(os.path.dirname(__file__), "translations")

# Business identity (used in notification headers/footers)
BUSINESS_NAME = "PVC Cabinets Haiti"
BUSINESS_TAGLINE = "PVC Cabinets Haiti by Zewo | Professional PVC Cabinet Installation"
BUSINESS_PHONE = "+509 3212 3456"
BUSINESS_CONTACT_EMAIL = "info@pvchaiti.com"
CURRENCY = "HTG"

# Quote estimation
BASE_PRICE_PER_SQFT = float(os.getenv("BASE_PRICE_PER_SQFT_HTG", "450"))
FEATURE_MULTIPLIERS: Dict[str, float] = {
    "soft-close-hinges": 1.1,
    "pull-out-drawers": 1.15,
    "lazy-susan": 1.05,
    "crown-molding": 1.08,
    "under-cabinet-lighting": 1.12,
    "glass-doors": 1.1,
    "wine-rack": 1.05,
    "spice-rack": 1.03,
}
URGENT_TIMELINE = "asap"

# PVC maintenance is a flat share of the initial cost per year (cleaning supplies)
PVC_ANNUAL_MAINTENANCE_RATE = 0.02
PROJECTION_YEARS = 5

# Calculator widget defaults
CALCULATOR_DEFAULTS = {
    "kitchen_size": 120.0,  # sq ft
    "pvc_price_per_sqft": 450.0,  # HTG per sq ft
    "wood_price_per_sqft": 350.0,  # HTG per sq ft
    "wood_maintenance_percent": 8.0,  # % of initial cost per year
    "humidity_multiplier": 1.5,  # Haiti's high humidity factor
    "wood_replacement_risk": 25.0,  # % chance of replacement needed
}

# Upper bounds on user-supplied sizes and prices
MAX_ROOM_DIMENSION_FT = 1_000.0
MAX_KITCHEN_SIZE_SQFT = 100_000.0
MAX_PRICE_PER_SQFT = 1_000_000.0
MAX_HUMIDITY_MULTIPLIER = 10.0

# i18n
SUPPORTED_LANGUAGES = ("ht", "fr", "en")
FALLBACK_LANGUAGE = "en"

# CORS
CORS_ALLOW_METHODS = ["POST", "OPTIONS"]
CORS_ALLOW_HEADERS = [
    "X-CSRF-Token",
    "X-Requested-With",
    "Accept",
    "Accept-Version",
    "Content-Length",
    "Content-MD5",
    "Content-Type",
    "Date",
    "X-Api-Version",
]
