# astrobiogen/clients/space.py
# ISS position (Open Notify), DONKI space weather feeds, TheSpaceDevs launches.

from __future__ import annotations

import asyncio
import json
import logging
from datetime import date
from typing import Any, Dict, List

from astrobiogen.net import Upstream, UpstreamError, UpstreamMalformedPayload

log = logging.getLogger("astrobiogen.clients.space")

DONKI_FEEDS = ("CME", "FLR", "SEP")


async def fetch_iss(up: Upstream, **_: Any) -> Dict[str, Any]:
    return await up.get_json("open_notify", "/iss-now.json", shape=dict)


async def _donki_feed(up: Upstream, feed: str, start_date: date, end_date: date) -> List[Any]:
    # DONKI answers an empty window with an empty body, so read text first
    text = await up.get_text(
        "donki",
        f"/{feed}",
        params={"startDate": start_date.isoformat(), "endDate": end_date.isoformat()},
    )
    if not text.strip():
        return []
    try:
        payload = json.loads(text)
    except ValueError:
        raise UpstreamMalformedPayload("donki", f"{feed} body is not JSON") from None
    # error objects such as {"error": "rate limit"} fail this feed only
    if not isinstance(payload, list):
        raise UpstreamMalformedPayload("donki", f"{feed} body is not a JSON array")
    return payload


async def fetch_space_weather(up: Upstream, *, start_date: date, end_date: date, **_: Any) -> Dict[str, Any]:
    """Fetch the three DONKI feeds concurrently.

    A failing feed contributes [] and is logged; only when every feed fails is
    the first error raised.
    """
    results = await asyncio.gather(
        *(_donki_feed(up, feed, start_date, end_date) for feed in DONKI_FEEDS),
        return_exceptions=True,
    )
    bundle: Dict[str, Any] = {}
    errors: List[UpstreamError] = []
    for feed, res in zip(DONKI_FEEDS, results):
        if isinstance(res, UpstreamError):
            log.warning("DONKI %s feed failed: %s", feed, res)
            errors.append(res)
            bundle[feed] = []
        elif isinstance(res, BaseException):
            raise res
        else:
            bundle[feed] = res
    if len(errors) == len(DONKI_FEEDS):
        raise errors[0]
    return bundle


async def fetch_launches(up: Upstream, *, limit: int = 5, **_: Any) -> Dict[str, Any]:
    return await up.get_json("spacedevs", "/launch/upcoming/", params={"limit": limit}, shape=dict)
