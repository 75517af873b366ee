from __future__ import annotations
"""
Normalization helpers for AstroBioGen.

What this module does:
- Map upstream payloads (GeneLab DGE rows, DONKI, Open Notify, TheSpaceDevs,
  Groq completions, Tavily search, NASA Image Library, APOD) onto the canonical
  records in astrobiogen.models.
- Drop individual records that lack a required field instead of failing the call.
- Raise UpstreamMalformedPayload only when the payload as a whole has the wrong shape.
- Compute the planet wheel and a few GeneLab metadata helpers.

Every function here is pure: no I/O, no clock reads unless a date is passed in.
"""

import json
import math
import re
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from astrobiogen.models import (
    Apod,
    ChatReply,
    DataFile,
    Explanation,
    GeneRecord,
    IssLocation,
    LaunchRecord,
    NasaImage,
    PlanetFacts,
    PlanetPosition,
    QuizQuestion,
    ResearchResult,
    Sample,
    SearchResult,
    SourceRef,
    SpaceWeatherEvent,
)
from astrobiogen.net import UpstreamMalformedPayload, ValidationFailure

NOAA_LINK = "https://www.swpc.noaa.gov/"

# --------------------------------------------------------------------------------------
# Small coercions
# --------------------------------------------------------------------------------------

def _first(row: Dict[str, Any], *keys: str) -> Any:
    for k in keys:
        v = row.get(k)
        if v is not None and v != "":
            return v
    return None


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        f = float(value)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def _name(obj: Any) -> Optional[str]:
    if isinstance(obj, dict):
        v = obj.get("name")
        return str(v) if v else None
    return None


def _parse_time(value: str) -> datetime:
    s = (value or "").strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt

# --------------------------------------------------------------------------------------
# GeneLab
# --------------------------------------------------------------------------------------

def normalize_gene_rows(rows: Iterable[Dict[str, Any]]) -> List[GeneRecord]:
    """DGE rows (any of the known column spellings) -> GeneRecord list.

    Rows without a symbol, without a finite fold change, or with a p-value
    outside (0, 1] are dropped.
    """
    out: List[GeneRecord] = []
    for row in rows or []:
        if not isinstance(row, dict):
            continue
        symbol = _first(row, "gene_symbol", "Symbol", "Gene Symbol")
        fold_change = _to_float(_first(row, "fold_change", "log2FoldChange", "Fold Change"))
        p_value = _to_float(_first(row, "p_value", "padj", "P-value"))
        if not symbol or not str(symbol).strip() or fold_change is None or p_value is None:
            continue
        name = _first(row, "gene_name", "Name", "Gene Name")
        try:
            out.append(GeneRecord(
                gene_symbol=str(symbol).strip(),
                gene_name=str(name) if name is not None else None,
                fold_change=fold_change,
                p_value=p_value,
                function=str(_first(row, "function", "description", "Gene Function") or ""),
            ))
        except ValidationError:
            continue
    return out


def sort_genes(genes: List[GeneRecord], sort: str = "fold_change", order: str = "desc", limit: int = 100) -> List[GeneRecord]:
    reverse = str(order).lower() != "asc"
    ranked = sorted(genes, key=lambda g: getattr(g, sort), reverse=reverse)
    return ranked[: max(0, int(limit))]


def calculate_duration(launch_date: Optional[str], landing_date: Optional[str]) -> str:
    if not launch_date or not landing_date:
        return "Unknown"
    try:
        launch = _parse_iso_day(launch_date)
        landing = _parse_iso_day(landing_date)
    except ValueError:
        return "Unknown"
    seconds = abs((landing - launch).total_seconds())
    return f"{math.ceil(seconds / 86400)} days"


def _parse_iso_day(value: str) -> datetime:
    s = value.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    dt = datetime.fromisoformat(s)
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def normalize_samples(samples: Iterable[Dict[str, Any]]) -> List[Sample]:
    return [
        Sample(
            id=str(_first(s, "sample_id", "id", "name") or "Unknown"),
            type=str(_first(s, "sample_type", "type") or "Unknown"),
            condition=str(s.get("condition") or "Unknown"),
        )
        for s in (samples or [])
        if isinstance(s, dict)
    ]


def normalize_data_files(files: Iterable[Dict[str, Any]]) -> List[DataFile]:
    return [
        DataFile(
            name=str(_first(f, "file_name", "name") or "Unknown"),
            type=str(_first(f, "file_type", "type") or "Unknown"),
            size=str(_first(f, "file_size", "size") or "Unknown"),
            url=_first(f, "download_url", "url") or None,
        )
        for f in (files or [])
        if isinstance(f, dict)
    ]

# --------------------------------------------------------------------------------------
# Space data
# --------------------------------------------------------------------------------------

def normalize_iss(payload: Any) -> IssLocation:
    pos = payload.get("iss_position") if isinstance(payload, dict) else None
    if not isinstance(pos, dict):
        raise UpstreamMalformedPayload("open_notify", "missing iss_position")
    lat = _to_float(pos.get("latitude"))
    lon = _to_float(pos.get("longitude"))
    ts = _to_float(payload.get("timestamp"))
    if lat is None or lon is None or ts is None:
        raise UpstreamMalformedPayload("open_notify", "unparseable position")
    return IssLocation(timestamp=int(ts), latitude=lat, longitude=lon, altitude=408, velocity=27600)


def _donki_list(payload: Any, source: str) -> List[Dict[str, Any]]:
    # DONKI answers an empty window with an empty body or []
    if payload is None or payload == "":
        return []
    if not isinstance(payload, list):
        raise UpstreamMalformedPayload(source, "expected a JSON array")
    return [e for e in payload if isinstance(e, dict)]


def normalize_cme(payload: Any) -> List[SpaceWeatherEvent]:
    out = []
    for e in _donki_list(payload, "donki"):
        if not e.get("activityID") or not e.get("startTime"):
            continue
        try:
            out.append(SpaceWeatherEvent(
                activityID=str(e["activityID"]),
                startTime=str(e["startTime"]),
                sourceLocation=e.get("sourceLocation") or "Unknown",
                note=e.get("note") or "Coronal Mass Ejection detected",
                type="CME",
                link=e.get("link") or NOAA_LINK,
            ))
        except ValidationError:
            continue
    return out


def normalize_flares(payload: Any) -> List[SpaceWeatherEvent]:
    out = []
    for e in _donki_list(payload, "donki"):
        if not e.get("flrID") or not e.get("beginTime"):
            continue
        try:
            out.append(SpaceWeatherEvent(
                activityID=str(e["flrID"]),
                startTime=str(e["beginTime"]),
                sourceLocation=e.get("sourceLocation") or "Unknown",
                note=f"Class {e.get('classType') or 'unknown'} solar flare detected",
                type="FLARE",
                link=NOAA_LINK,
            ))
        except ValidationError:
            continue
    return out


def normalize_seps(payload: Any) -> List[SpaceWeatherEvent]:
    out = []
    for e in _donki_list(payload, "donki"):
        if not e.get("sepID") or not e.get("eventTime"):
            continue
        try:
            out.append(SpaceWeatherEvent(
                activityID=str(e["sepID"]),
                startTime=str(e["eventTime"]),
                sourceLocation=e.get("sourceLocation") or "Unknown",
                note="Solar energetic particle event detected",
                type="SEP",
                link=e.get("link") or NOAA_LINK,
            ))
        except ValidationError:
            continue
    return out


def merge_weather(*groups: Iterable[SpaceWeatherEvent]) -> List[SpaceWeatherEvent]:
    merged = [e for g in groups for e in g]
    return sorted(merged, key=lambda e: _parse_time(e.startTime), reverse=True)


def normalize_space_weather(bundle: Dict[str, Any]) -> List[SpaceWeatherEvent]:
    """{"CME": payload, "FLR": payload, "SEP": payload} -> merged, newest first."""
    return merge_weather(
        normalize_cme(bundle.get("CME")),
        normalize_flares(bundle.get("FLR")),
        normalize_seps(bundle.get("SEP")),
    )


def normalize_launches(payload: Any) -> List[LaunchRecord]:
    results = payload.get("results") if isinstance(payload, dict) else None
    if not isinstance(results, list):
        raise UpstreamMalformedPayload("spacedevs", "missing results")
    out = []
    for launch in results:
        if not isinstance(launch, dict) or not launch.get("name") or not launch.get("net"):
            continue
        rocket = launch.get("rocket") if isinstance(launch.get("rocket"), dict) else {}
        pad = launch.get("pad") if isinstance(launch.get("pad"), dict) else {}
        mission = launch.get("mission") if isinstance(launch.get("mission"), dict) else {}
        try:
            out.append(LaunchRecord(
                name=str(launch["name"]),
                provider=_name(launch.get("launch_service_provider")) or "Unknown",
                vehicle=_name(rocket.get("configuration")) or "Unknown Vehicle",
                pad=_name(pad) or "Unknown",
                location=_name(pad.get("location")) or "Unknown Location",
                net=str(launch["net"]),
                status=_name(launch.get("status")) or "Unknown",
                mission=_name(mission) or "Unknown Mission",
                description=mission.get("description") or "No description available",
            ))
        except ValidationError:
            continue
    return out


# (name, distance AU, degrees per day, offset degrees, diameter vs Earth)
_PLANETS = [
    ("Mercury", 0.39, 4.15, 45, 0.38),
    ("Venus", 0.72, 1.62, 90, 0.95),
    ("Earth", 1.00, 1.0, 0, 1.00),
    ("Mars", 1.52, 0.53, 135, 0.53),
    ("Jupiter", 5.20, 0.084, 180, 11.2),
    ("Saturn", 9.58, 0.034, 225, 9.45),
    ("Uranus", 19.18, 0.012, 270, 4.0),
    ("Neptune", 30.07, 0.006, 315, 3.88),
]


def planetary_positions(today: date) -> List[PlanetPosition]:
    """Schematic planet wheel. A pure function of the calendar day."""
    day_of_year = today.timetuple().tm_yday
    return [
        PlanetPosition(name=name, distance=dist, angle=(day_of_year * rate + offset) % 360, diameter=diam)
        for name, dist, rate, offset, diam in _PLANETS
    ]

# --------------------------------------------------------------------------------------
# LLM output (Groq)
# --------------------------------------------------------------------------------------

_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
_ITALIC_RE = re.compile(r"\*(.*?)\*")
_HEADER_RE = re.compile(r"^#{1,6} (.*?)$", re.MULTILINE)
_LINK_RE = re.compile(r"\[(.*?)\]\((.*?)\)")
_BLANKS_RE = re.compile(r"\n{3,}")
_NUMBERING_RE = re.compile(r"^\s*(?:\d+[.)]|[-*•])\s*")
_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")


def completion_text(payload: Any) -> str:
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        raise UpstreamMalformedPayload("groq", "missing choices[0].message.content") from None
    return content if isinstance(content, str) else ""


def clean_llm_text(text: str) -> str:
    s = _BOLD_RE.sub(r"\1", text or "")
    s = _ITALIC_RE.sub(r"\1", s)
    s = _HEADER_RE.sub(r"\1", s)
    s = _LINK_RE.sub(r"\1", s)
    s = _BLANKS_RE.sub("\n\n", s)
    return s.strip()


def normalize_explanation(payload: Any) -> Optional[Explanation]:
    text = clean_llm_text(completion_text(payload))
    return Explanation(explanation=text) if text else None


def normalize_chat_completion(payload: Any) -> Optional[ChatReply]:
    text = clean_llm_text(completion_text(payload))
    return ChatReply(response=text) if text else None


def parse_facts(text: str, n: int = 5) -> List[str]:
    facts = []
    for line in (text or "").split("\n"):
        line = _NUMBERING_RE.sub("", line).strip()
        if line:
            facts.append(line)
    return facts[:n]


def normalize_planet_facts(payload: Any) -> Optional[PlanetFacts]:
    facts = parse_facts(clean_llm_text(completion_text(payload)))
    return PlanetFacts(facts=facts) if facts else None


def parse_quiz(text: str, n: int) -> List[QuizQuestion]:
    m = _FENCE_RE.search(text or "")
    raw = m.group(1) if m else (text or "")
    try:
        items = json.loads(raw)
    except ValueError:
        raise UpstreamMalformedPayload("groq", "quiz is not valid JSON") from None
    if isinstance(items, dict):
        items = items.get("questions")
    if not isinstance(items, list):
        raise UpstreamMalformedPayload("groq", "quiz is not a JSON array")
    out: List[QuizQuestion] = []
    for item in items:
        try:
            q = QuizQuestion.model_validate(item)
        except ValidationError:
            continue
        if len(q.options) == 4 and q.correctAnswer in q.options:
            out.append(q)
    return out[: max(0, n)]

# --------------------------------------------------------------------------------------
# Search (Tavily)
# --------------------------------------------------------------------------------------

def _source_refs(results: Any) -> List[SourceRef]:
    refs = []
    for r in results or []:
        if not isinstance(r, dict) or not r.get("url"):
            continue
        refs.append(SourceRef(title=str(r.get("title") or ""), url=str(r["url"]), content=str(r.get("content") or "")))
    return refs


def normalize_tavily(payload: Any) -> ResearchResult:
    if not isinstance(payload, dict):
        raise UpstreamMalformedPayload("tavily", "expected a JSON object")
    answer = payload.get("answer")
    if not answer or not str(answer).strip():
        raise ValidationFailure("tavily", "no answer in response")
    return ResearchResult(answer=str(answer).strip(), sources=_source_refs(payload.get("results")))


def normalize_search(payload: Any) -> Optional[SearchResult]:
    if not isinstance(payload, dict):
        raise UpstreamMalformedPayload("tavily", "expected a JSON object")
    results = [r for r in (payload.get("results") or []) if isinstance(r, dict)]
    answer = payload.get("answer") or None
    if not results and not answer:
        return None
    return SearchResult(answer=answer, results=results, images=list(payload.get("images") or []))


def normalize_tavily_answer(payload: Any) -> Optional[ChatReply]:
    answer = payload.get("answer") if isinstance(payload, dict) else None
    return ChatReply(response=str(answer).strip()) if answer and str(answer).strip() else None

# --------------------------------------------------------------------------------------
# NASA
# --------------------------------------------------------------------------------------

def normalize_nasa_images(payload: Any) -> List[NasaImage]:
    collection = payload.get("collection") if isinstance(payload, dict) else None
    items = collection.get("items") if isinstance(collection, dict) else None
    if not isinstance(items, list):
        raise UpstreamMalformedPayload("nasa_images", "missing collection.items")
    out = []
    for item in items:
        if not isinstance(item, dict):
            continue
        data_list = item.get("data")
        data = data_list[0] if isinstance(data_list, list) and data_list else {}
        links = item.get("links") if isinstance(item.get("links"), list) else []
        preview = next((l for l in links if isinstance(l, dict) and l.get("rel") == "preview"), None)
        if not preview or not preview.get("href") or not isinstance(data, dict):
            continue
        try:
            out.append(NasaImage(
                title=str(data.get("title") or "Untitled"),
                description=data.get("description"),
                date_created=data.get("date_created"),
                href=str(preview["href"]),
            ))
        except ValidationError:
            continue
    return out


def normalize_apod(payload: Any) -> Apod:
    if not isinstance(payload, dict) or not payload.get("title") or not payload.get("url"):
        raise UpstreamMalformedPayload("nasa_api", "APOD without title or url")
    try:
        return Apod.model_validate(payload)
    except ValidationError as e:
        raise UpstreamMalformedPayload("nasa_api", f"APOD: {e.error_count()} invalid field(s)") from None
