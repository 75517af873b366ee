"""
AstroBioGen input validation
============================

Validators for request bodies and query parameters. No network, no state.

- require_text(value, message)          -> stripped str, or HTTP 400 with `message`
- require_list(value, message)          -> non-empty list, or HTTP 400 with `message`
- require_mapping(value, message)       -> dict (possibly empty), or HTTP 400 with `message`
- validate_limit(value, lo, hi, field)  -> int within bounds, or HTTP 400
- validate_sort(value)                  -> "fold_change" | "p_value", or HTTP 400
- planet_names(planets)                 -> names from a list of str or {name} objects

The messages mirror what the frontend already displays.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import HTTPException

GENE_SORT_FIELDS = ("fold_change", "p_value")


def _ensure_nonempty(value: Optional[str], message: str) -> str:
    if value is None or not isinstance(value, (str, int, float)) or isinstance(value, bool):
        raise HTTPException(status_code=400, detail=message)
    v = str(value).strip()
    if not v:
        raise HTTPException(status_code=400, detail=message)
    return v


def require_text(value: Any, message: str) -> str:
    return _ensure_nonempty(value, message)


def require_list(value: Any, message: str, *, allow_empty: bool = False) -> List[Any]:
    if not isinstance(value, list) or (not value and not allow_empty):
        raise HTTPException(status_code=400, detail=message)
    return value


def require_mapping(value: Any, message: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise HTTPException(status_code=400, detail=message)
    return value


def validate_limit(value: Optional[int], lo: int = 1, hi: int = 1000, field: str = "limit", default: int = 100) -> int:
    if value is None:
        return min(default, hi)
    try:
        v = int(value)
    except Exception:
        raise HTTPException(status_code=400, detail=f"Invalid {field} '{value}' (must be integer)")
    if v < lo or v > hi:
        raise HTTPException(status_code=400, detail=f"{field} must be between {lo} and {hi}")
    return v


def validate_sort(value: Optional[str]) -> str:
    v = (value or "fold_change").strip()
    if v not in GENE_SORT_FIELDS:
        raise HTTPException(status_code=400, detail=f"sort must be one of {', '.join(GENE_SORT_FIELDS)}")
    return v


def planet_names(planets: List[Any]) -> List[str]:
    names = []
    for p in planets:
        if isinstance(p, dict) and p.get("name"):
            names.append(str(p["name"]))
        elif isinstance(p, str) and p.strip():
            names.append(p.strip())
    return names


__all__ = [
    "GENE_SORT_FIELDS",
    "require_text",
    "require_list",
    "require_mapping",
    "validate_limit",
    "validate_sort",
    "planet_names",
]
