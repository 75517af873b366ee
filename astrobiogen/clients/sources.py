# astrobiogen/clients/sources.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

from astrobiogen.settings import Settings

# ------------------------------------------------------------------------------------
# Model
# ------------------------------------------------------------------------------------
@dataclass(frozen=True)
class Source:
    name: str
    base_url: str
    timeout: float = 10.0
    auth_scheme: Optional[str] = None          # "bearer" or "query:<param>"
    key_attr: Optional[str] = None             # Settings attribute holding the key
    required_key: bool = False                 # missing key short-circuits before I/O
    default_headers: Dict[str, str] = field(default_factory=dict)


def _join_url(base: str, path: str) -> str:
    if not base:
        return path
    if path.startswith("http://") or path.startswith("https://"):
        return path
    if not base.endswith("/") and not path.startswith("/"):
        return f"{base}/{path}"
    if base.endswith("/") and path.startswith("/"):
        return f"{base}{path[1:]}"
    return f"{base}{path}"


def api_key_for(src: Source, settings: Settings) -> Optional[str]:
    if not src.key_attr:
        return None
    return getattr(settings, src.key_attr, None) or None


def _make_headers(src: Source, settings: Settings) -> Dict[str, str]:
    headers = {
        "Accept": "application/json",
        "User-Agent": settings.user_agent,
        **src.default_headers,
    }
    tok = api_key_for(src, settings)
    if tok and src.auth_scheme and src.auth_scheme.lower() == "bearer":
        headers["Authorization"] = f"Bearer {tok}"
    return headers


def _auth_params(src: Source, settings: Settings) -> Dict[str, Any]:
    tok = api_key_for(src, settings)
    if tok and src.auth_scheme and src.auth_scheme.lower().startswith("query:"):
        return {src.auth_scheme.split(":", 1)[1]: tok}
    return {}


# ------------------------------------------------------------------------------------
# Registry
# ------------------------------------------------------------------------------------
def build_sources(settings: Settings) -> Dict[str, Source]:
    return {
        # GeneLab DGE files are addressed by absolute URL (template in settings)
        "genelab": Source(
            name="genelab",
            base_url="",
            timeout=settings.genelab_timeout_s,
            default_headers={"Accept": "text/csv, text/plain, */*"},
        ),
        "open_notify": Source(
            name="open_notify",
            base_url=settings.open_notify_base_url,
            timeout=settings.iss_timeout_s,
        ),
        "donki": Source(
            name="donki",
            base_url=settings.donki_base_url,
            timeout=settings.donki_timeout_s,
            auth_scheme="query:api_key",
            key_attr="nasa_api_key",
        ),
        "spacedevs": Source(
            name="spacedevs",
            base_url=settings.spacedevs_base_url,
            timeout=settings.spacedevs_timeout_s,
        ),
        "groq": Source(
            name="groq",
            base_url=settings.groq_base_url,
            timeout=settings.groq_timeout_s,
            auth_scheme="bearer",
            key_attr="groq_api_key",
            required_key=True,
        ),
        "tavily": Source(
            name="tavily",
            base_url=settings.tavily_base_url,
            timeout=settings.tavily_timeout_s,
            auth_scheme="bearer",
            key_attr="tavily_api_key",
            required_key=True,
        ),
        "nasa_images": Source(
            name="nasa_images",
            base_url=settings.nasa_images_base_url,
            timeout=settings.nasa_timeout_s,
        ),
        "nasa_api": Source(
            name="nasa_api",
            base_url=settings.nasa_api_base_url,
            timeout=settings.nasa_timeout_s,
            auth_scheme="query:api_key",
            key_attr="nasa_api_key",
        ),
    }


def iter_sources(sources: Dict[str, Source]) -> Iterable[Source]:
    return sources.values()
