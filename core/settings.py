"""Service settings loaded from the environment.

Reads configuration from environment variables (optionally from a .env file
at the project root):
- ERPNEXT_URL: Base URL of the ERPNext instance (e.g. "http://localhost:8000")
- ERPNEXT_API_KEY / ERPNEXT_API_SECRET: API token pair
- ERPNEXT_TIMEOUT_SECONDS: Per-request timeout (default 30)
- ERPNEXT_CATEGORIES: Comma separated tool categories to expose (default all)
- LOG_LEVEL, LOG_JSON: Logging setup
- HTTP_HOST, HTTP_PORT: Bind address of the HTTP surface
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from connectors.frappe.frappe_client import FrappeClientConfig

PROJECT_ROOT = Path(__file__).resolve().parent.parent

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Process-wide settings, passed explicitly to the client and dispatcher."""
    client: FrappeClientConfig
    categories: Optional[List[str]] = None
    log_level: str = "INFO"
    json_logs: bool = False
    http_host: str = "0.0.0.0"
    http_port: int = 3012


def _parse_categories(raw: Optional[str]) -> Optional[List[str]]:
    if not raw:
        return None
    categories = [c.strip() for c in raw.split(",") if c.strip()]
    return categories or None


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Build Settings from the environment.

    Args:
        env_file: Explicit .env path; defaults to ``.env`` at the project root

    Raises:
        ValueError: If the URL or the API credentials are missing
    """
    env_path = Path(env_file) if env_file else PROJECT_ROOT / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    url = os.getenv("ERPNEXT_URL")
    api_key = os.getenv("ERPNEXT_API_KEY")
    api_secret = os.getenv("ERPNEXT_API_SECRET")

    if not url:
        raise ValueError(
            "ERPNEXT_URL is required. "
            "Set it to your ERPNext instance URL, e.g. http://localhost:8000"
        )

    if not api_key or not api_secret:
        raise ValueError(
            "ERPNEXT_API_KEY and ERPNEXT_API_SECRET are required. "
            "Generate them from User > API Access in ERPNext"
        )

    client = FrappeClientConfig(
        base_url=url,
        api_key=api_key,
        api_secret=api_secret,
        timeout_seconds=float(os.getenv("ERPNEXT_TIMEOUT_SECONDS", "30")),
    )

    return Settings(
        client=client,
        categories=_parse_categories(os.getenv("ERPNEXT_CATEGORIES")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        json_logs=os.getenv("LOG_JSON", "").lower() in _TRUE_VALUES,
        http_host=os.getenv("HTTP_HOST", "0.0.0.0"),
        http_port=int(os.getenv("HTTP_PORT", "3012")),
    )


__all__ = ["FrappeClientConfig", "Settings", "load_settings"]
