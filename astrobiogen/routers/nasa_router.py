# astrobiogen/routers/nasa_router.py
"""
NASA Image and Video Library search and the Astronomy Picture of the Day.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response

from astrobiogen import fallbacks
from astrobiogen.clients import nasa
from astrobiogen.hybrid import SourceMode, get_source_mode, hybridize, respond
from astrobiogen.models import Apod, ImageResults
from astrobiogen.net import Upstream, get_upstream
from astrobiogen.utils.normalize import normalize_apod, normalize_nasa_images
from astrobiogen.utils.validation import require_text, validate_limit

router = APIRouter(prefix="/api/nasa", tags=["nasa"])

MIN_IMAGES = 3

hybrid_images = hybridize(
    "nasa_images",
    nasa.search_images,
    fallbacks.nasa_images,
    normalize=normalize_nasa_images,
    source_name_live="NASA_Images",
    source_name_fallback="PLANET_IMAGES",
)

hybrid_apod = hybridize(
    "apod",
    nasa.apod,
    fallbacks.apod,
    normalize=normalize_apod,
    source_name_live="NASA_APOD",
    source_name_fallback="APOD_SAMPLE",
)


@router.get("/images", response_model=ImageResults)
async def images(
    request: Request,
    response: Response,
    query: Optional[str] = None,
    count: int = 5,
    mode: SourceMode = Depends(get_source_mode),
    up: Upstream = Depends(get_upstream),
):
    query = require_text(query, "Query parameter is required")
    count = validate_limit(count, lo=1, hi=100, field="count", default=5)
    ev = await hybrid_images(up, mode=mode, request=request, query=query, count=count)
    items = respond(ev, response)
    # short live result sets are topped up with planet images
    return ImageResults(items=fallbacks.pad_images(items, query, minimum=MIN_IMAGES))


@router.get("/apod", response_model=Apod)
async def apod(
    request: Request,
    response: Response,
    mode: SourceMode = Depends(get_source_mode),
    up: Upstream = Depends(get_upstream),
):
    ev = await hybrid_apod(up, mode=mode, request=request)
    return respond(ev, response)
