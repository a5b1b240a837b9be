# trolley/config.py
from __future__ import annotations
import os


class Config:
    # Backend REST API root; every resource path is relative to it
    API_BASE_URL = os.environ.get(
        "TROLLEY_API_BASE_URL", #optional alternative backend
        "http://localhost:5000/api", #default local backend
    )

    # Durable token + admin identity store
    SESSION_PATH = os.environ.get(
        "TROLLEY_SESSION_PATH",
        os.path.join(os.path.expanduser("~"), ".trolley", "session.json"),
    )

    # Seconds before an outbound call fails with TransportError
    REQUEST_TIMEOUT = float(os.environ.get("TROLLEY_REQUEST_TIMEOUT", "30"))

    DISPLAY_LOCALE = os.environ.get("TROLLEY_LOCALE", "en_IN")

    LOG_LEVEL = os.environ.get("TROLLEY_LOG_LEVEL", "WARNING")
