"""Environment-driven settings shared by the server and the diagnostic scripts."""

from __future__ import annotations

import os
from pathlib import Path

SITE_URL = "https://kyros.cc"
LOCAL_URL = "http://localhost:3000"
DEV_URL = "http://localhost:8000"


def site_url() -> str:
    """Public site targeted by the live checks."""
    return os.environ.get("KYROS_SITE_URL", SITE_URL)


def local_url() -> str:
    """Local server targeted by the device suites."""
    return os.environ.get("KYROS_LOCAL_URL", LOCAL_URL)


def dev_url() -> str:
    return os.environ.get("KYROS_DEV_URL", DEV_URL)


def report_dir() -> Path:
    return Path(os.environ.get("KYROS_REPORT_DIR", "."))


def screenshot_dir() -> Path:
    return Path(os.environ.get("KYROS_SCREENSHOT_DIR", "/tmp"))


def headless(default: bool) -> bool:
    """Resolve headless mode, letting KYROS_HEADLESS override the script default."""
    value = os.environ.get("KYROS_HEADLESS")
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() not in ("0", "false", "no", "off")


def server_host() -> str:
    return os.environ.get("KYROS_HOST", "0.0.0.0")


def server_port() -> int:
    raw = os.environ.get("KYROS_PORT", "8080")
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"KYROS_PORT must be an integer, got {raw!r}") from e
