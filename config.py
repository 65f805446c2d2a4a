"""
config.py
---------
Loads settings from the environment (and an optional .env file) and exposes
them as typed constants.
"""

import os

from dotenv import load_dotenv

load_dotenv()


DATABASE_URL: str = os.getenv("SAMPLE_DATABASE_URL", "sqlite:///sample.db")
DATABASE_ECHO: bool = os.getenv("SAMPLE_DATABASE_ECHO", "false").lower() in ("1", "true", "yes")

LOG_LEVEL: str = os.getenv("SAMPLE_LOG_LEVEL", "INFO").upper()
