from __future__ import annotations

from typing import Any

from resume_tools.core.config import settings

# The tool surface only exposes JSON POST routes and the health probe.
CORS_METHODS = ("GET", "POST", "OPTIONS")


def cors_options() -> dict[str, Any]:
    """Keyword arguments for CORSMiddleware derived from settings."""
    regex = (settings.cors_allow_origin_regex or "").strip()
    return {
        "allow_origins": list(settings.cors_allowed_origins),
        "allow_origin_regex": regex or None,
        "allow_credentials": True,
        "allow_methods": list(CORS_METHODS),
        "allow_headers": ["*"],
    }
