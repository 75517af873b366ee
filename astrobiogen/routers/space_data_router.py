# astrobiogen/routers/space_data_router.py
"""
Live space data: ISS position, space weather, planet wheel, upcoming launches.
"""

from datetime import date, timedelta
from typing import List

from fastapi import APIRouter, Depends, Request, Response

from astrobiogen import fallbacks
from astrobiogen.clients import space
from astrobiogen.hybrid import SourceMode, get_source_mode, hybridize, respond
from astrobiogen.models import IssLocation, LaunchRecord, PlanetPosition, SpaceWeatherEvent
from astrobiogen.net import Upstream, get_upstream
from astrobiogen.utils.normalize import normalize_iss, normalize_launches, normalize_space_weather, planetary_positions

router = APIRouter(prefix="/api/space-data", tags=["space-data"])

WEATHER_WINDOW = timedelta(days=7)

hybrid_iss = hybridize(
    "iss_location",
    space.fetch_iss,
    fallbacks.iss_location,
    normalize=normalize_iss,
    source_name_live="OpenNotify",
    source_name_fallback="ISS_REFERENCE",
)

hybrid_weather = hybridize(
    "space_weather",
    space.fetch_space_weather,
    fallbacks.space_weather,
    normalize=normalize_space_weather,
    source_name_live="DONKI",
    source_name_fallback="WEATHER_SAMPLE",
)

hybrid_launches = hybridize(
    "upcoming_launches",
    space.fetch_launches,
    fallbacks.upcoming_launches,
    normalize=normalize_launches,
    source_name_live="TheSpaceDevs",
    source_name_fallback="LAUNCH_SCHEDULE",
)


@router.get("/iss-location", response_model=IssLocation)
async def iss_location(
    request: Request,
    response: Response,
    mode: SourceMode = Depends(get_source_mode),
    up: Upstream = Depends(get_upstream),
):
    ev = await hybrid_iss(up, mode=mode, request=request)
    return respond(ev, response)


@router.get("/space-weather", response_model=List[SpaceWeatherEvent])
async def space_weather(
    request: Request,
    response: Response,
    mode: SourceMode = Depends(get_source_mode),
    up: Upstream = Depends(get_upstream),
):
    today = date.today()
    ev = await hybrid_weather(up, mode=mode, request=request, start_date=today - WEATHER_WINDOW, end_date=today)
    return respond(ev, response)


@router.get("/planetary-positions", response_model=List[PlanetPosition])
async def planetary_positions_route(response: Response):
    # computed locally, never degraded
    response.headers["X-Data-Source"] = "computed"
    response.headers["X-Degraded"] = "false"
    return planetary_positions(date.today())


@router.get("/upcoming-launches", response_model=List[LaunchRecord])
async def upcoming_launches(
    request: Request,
    response: Response,
    mode: SourceMode = Depends(get_source_mode),
    up: Upstream = Depends(get_upstream),
):
    ev = await hybrid_launches(up, mode=mode, request=request)
    return respond(ev, response)
