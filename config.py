"""
config.py
-----------------
Application settings, loaded from the environment (and a local .env file).
"""

import os
from dotenv import load_dotenv

load_dotenv(override=False)


DEFAULT_MONGO_URI = "mongodb://localhost:27017/smartattend"


def _mongo_uri():
    # MONGODB_URI is the name older deployments use
    return os.getenv("MONGO_URI") or os.getenv("MONGODB_URI") or DEFAULT_MONGO_URI


def _flag(name, default):
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "smartattend-dev-key")
    PORT = int(os.getenv("PORT", "5000"))

    # MongoDB
    MONGO_URI = _mongo_uri()
    MONGO_CONNECT = _flag("MONGO_CONNECT", "false")  # connect lazily (fork-safe)
    MONGO_ENSURE_INDEXES = _flag("MONGO_ENSURE_INDEXES", "true")

    # Attendance rules
    ATTENDANCE_TIMEZONE = os.getenv("ATTENDANCE_TIMEZONE") or None  # None -> server local time
    LATE_AFTER = os.getenv("LATE_AFTER", "09:00")
    DEFAULT_ATTENDANCE_LIMIT = 50
    RECENT_ATTENDANCE_LIMIT = 10

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


class TestingConfig(Config):
    TESTING = True
    MONGO_URI = "mongodb://localhost:27017/smartattend_test"
    MONGO_ENSURE_INDEXES = False
    ATTENDANCE_TIMEZONE = "UTC"
    LOG_LEVEL = "WARNING"
