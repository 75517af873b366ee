# astrobiogen/settings.py
# Process configuration. Built once at startup and injected into the app factory.

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple


def _env(env: Mapping[str, str], name: str, default: str = "") -> str:
    return env.get(name, default)


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    try:
        return float(env.get(name, str(default)))
    except Exception:
        return default


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    try:
        return int(env.get(name, str(default)))
    except Exception:
        return default


def _bool_env(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Everything the gateway reads from the environment."""

    port: int = 5003
    log_level: str = "INFO"
    app_title: str = "AstroBioGen Gateway"
    app_version: str = "2026.10"
    user_agent: str = "astrobiogen-gateway/2026.10"
    cors_allow_origins: Tuple[str, ...] = ("*",)

    # Upstream credentials
    groq_api_key: Optional[str] = None
    tavily_api_key: Optional[str] = None
    nasa_api_key: str = "DEMO_KEY"

    # Groq completion defaults
    groq_model: str = "llama3-70b-8192"
    groq_temperature: float = 0.5
    groq_max_tokens: int = 800

    # GeneLab differential expression CSV, e.g. "https://host/path/{id}_dge.csv"
    genelab_dge_url: str = ""

    # Base URLs
    open_notify_base_url: str = "http://api.open-notify.org"
    donki_base_url: str = "https://api.nasa.gov/DONKI"
    spacedevs_base_url: str = "https://ll.thespacedevs.com/2.2.0"
    groq_base_url: str = "https://api.groq.com/openai/v1"
    tavily_base_url: str = "https://api.tavily.com"
    nasa_images_base_url: str = "https://images-api.nasa.gov"
    nasa_api_base_url: str = "https://api.nasa.gov"

    # Per-source timeouts (seconds)
    genelab_timeout_s: float = 10.0
    iss_timeout_s: float = 5.0
    donki_timeout_s: float = 10.0
    spacedevs_timeout_s: float = 10.0
    groq_timeout_s: float = 15.0
    tavily_timeout_s: float = 15.0
    nasa_timeout_s: float = 10.0

    cancel_on_disconnect: bool = True

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        e = os.environ if env is None else env
        origins = tuple(o.strip() for o in _env(e, "CORS_ALLOW_ORIGINS", "*").split(",") if o.strip())
        version = _env(e, "APP_VERSION", cls.app_version)
        return cls(
            port=_int_env(e, "PORT", cls.port),
            log_level=_env(e, "LOG_LEVEL", cls.log_level).upper(),
            app_title=_env(e, "APP_TITLE", cls.app_title),
            app_version=version,
            user_agent=_env(e, "OUTBOUND_USER_AGENT", f"astrobiogen-gateway/{version}"),
            cors_allow_origins=origins or ("*",),
            groq_api_key=_env(e, "GROQ_API_KEY") or None,
            tavily_api_key=_env(e, "TAVILY_API_KEY") or None,
            nasa_api_key=_env(e, "NASA_API_KEY") or cls.nasa_api_key,
            groq_model=_env(e, "GROQ_MODEL", cls.groq_model),
            groq_temperature=_float_env(e, "GROQ_TEMPERATURE", cls.groq_temperature),
            groq_max_tokens=_int_env(e, "GROQ_MAX_TOKENS", cls.groq_max_tokens),
            genelab_dge_url=_env(e, "GENELAB_DGE_URL", ""),
            open_notify_base_url=_env(e, "OPEN_NOTIFY_BASE_URL", cls.open_notify_base_url),
            donki_base_url=_env(e, "DONKI_BASE_URL", cls.donki_base_url),
            spacedevs_base_url=_env(e, "SPACEDEVS_BASE_URL", cls.spacedevs_base_url),
            groq_base_url=_env(e, "GROQ_BASE_URL", cls.groq_base_url),
            tavily_base_url=_env(e, "TAVILY_BASE_URL", cls.tavily_base_url),
            nasa_images_base_url=_env(e, "NASA_IMAGES_BASE_URL", cls.nasa_images_base_url),
            nasa_api_base_url=_env(e, "NASA_API_BASE_URL", cls.nasa_api_base_url),
            genelab_timeout_s=_float_env(e, "GENELAB_TIMEOUT_S", cls.genelab_timeout_s),
            iss_timeout_s=_float_env(e, "ISS_TIMEOUT_S", cls.iss_timeout_s),
            donki_timeout_s=_float_env(e, "DONKI_TIMEOUT_S", cls.donki_timeout_s),
            spacedevs_timeout_s=_float_env(e, "SPACEDEVS_TIMEOUT_S", cls.spacedevs_timeout_s),
            groq_timeout_s=_float_env(e, "GROQ_TIMEOUT_S", cls.groq_timeout_s),
            tavily_timeout_s=_float_env(e, "TAVILY_TIMEOUT_S", cls.tavily_timeout_s),
            nasa_timeout_s=_float_env(e, "NASA_TIMEOUT_S", cls.nasa_timeout_s),
            cancel_on_disconnect=_bool_env(e, "CANCEL_ON_DISCONNECT", cls.cancel_on_disconnect),
        )

    def key_status(self) -> dict:
        # presence only, never the values
        return {
            "groq": bool(self.groq_api_key),
            "tavily": bool(self.tavily_api_key),
            "nasa": bool(self.nasa_api_key) and self.nasa_api_key != "DEMO_KEY",
            "genelab_dge": bool(self.genelab_dge_url),
        }
