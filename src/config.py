"""
Configuration module for loading environment variables.

This module loads environment variables from .env file and exposes
configuration values for the import pipeline and listing store.
"""

import os
from pathlib import Path
from dotenv import load_dotenv
load_dotenv()

PROJECT_ROOT = Path(__file__).parent.parent

# Import defaults
DEFAULT_INCOTERM = os.getenv("DEFAULT_INCOTERM") or None
SAMPLE_SIZE = int(os.getenv("SAMPLE_SIZE", "10"))

# Listing store
LISTINGS_STORE_PATH = os.getenv(
    "LISTINGS_STORE_PATH",
    str(PROJECT_ROOT / "data" / "listings.json"),
)

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()
