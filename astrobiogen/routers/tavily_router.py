# astrobiogen/routers/tavily_router.py
"""
Web research via Tavily: free-form research, search with images, and the two
gene-centred questions (Earth applications, medical relevance).
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel

from astrobiogen import fallbacks, prompts
from astrobiogen.clients import tavily
from astrobiogen.hybrid import SourceMode, get_source_mode, hybridize, respond
from astrobiogen.models import ResearchResult, SearchResult
from astrobiogen.net import Upstream, get_upstream
from astrobiogen.utils.normalize import normalize_search, normalize_tavily
from astrobiogen.utils.validation import require_list, require_text

router = APIRouter(prefix="/api/tavily", tags=["tavily"])

# ==============================
# Request bodies
# ==============================

class ResearchBody(BaseModel):
    query: Any = None
    search_depth: str = "basic"


class SearchBody(BaseModel):
    query: Any = None
    search_depth: str = "basic"
    include_images: bool = True
    include_answer: bool = True
    include_raw_search_results: bool = False


class EarthApplicationsBody(BaseModel):
    experimentType: Any = None
    genes: Any = None
    spaceConditions: Optional[str] = None


class MedicalRelevanceBody(BaseModel):
    genes: Any = None
    condition: Optional[str] = None

# ==============================
# Wrappers
# ==============================

hybrid_research = hybridize(
    "tavily_research",
    tavily.search,
    fallbacks.research,
    normalize=normalize_tavily,
    source_name_live="Tavily",
    source_name_fallback="RESEARCH_TEXT",
)

hybrid_search = hybridize(
    "tavily_search",
    tavily.search,
    fallbacks.search,
    normalize=normalize_search,
    source_name_live="Tavily",
    source_name_fallback="NASA_IMAGE_RESULT",
)

hybrid_earth_applications = hybridize(
    "tavily_earth_applications",
    tavily.search,
    fallbacks.earth_applications,
    normalize=normalize_tavily,
    source_name_live="Tavily",
    source_name_fallback="EARTH_APPLICATIONS_TEXT",
)

hybrid_medical_relevance = hybridize(
    "tavily_medical_relevance",
    tavily.search,
    fallbacks.medical_relevance,
    normalize=normalize_tavily,
    source_name_live="Tavily",
    source_name_fallback="MEDICAL_RELEVANCE_TEXT",
)

# ==============================
# Endpoints
# ==============================

@router.post("/research", response_model=ResearchResult)
async def research(
    body: ResearchBody,
    request: Request,
    response: Response,
    mode: SourceMode = Depends(get_source_mode),
    up: Upstream = Depends(get_upstream),
):
    query = require_text(body.query, "Query is required")
    ev = await hybrid_research(
        up, mode=mode, request=request,
        query=query, search_depth=body.search_depth, include_answer=True,
    )
    return respond(ev, response)


@router.post("/search", response_model=SearchResult)
async def search(
    body: SearchBody,
    request: Request,
    response: Response,
    mode: SourceMode = Depends(get_source_mode),
    up: Upstream = Depends(get_upstream),
):
    query = require_text(body.query, "Query is required")
    ev = await hybrid_search(
        up, mode=mode, request=request,
        query=query,
        search_depth=body.search_depth,
        include_answer=body.include_answer,
        include_images=body.include_images,
        include_raw_content=body.include_raw_search_results,
    )
    return respond(ev, response)


@router.post("/earth-applications", response_model=ResearchResult)
async def earth_applications(
    body: EarthApplicationsBody,
    request: Request,
    response: Response,
    mode: SourceMode = Depends(get_source_mode),
    up: Upstream = Depends(get_upstream),
):
    message = "Experiment type and valid gene data are required"
    experiment_type = require_text(body.experimentType, message)
    genes = require_list(body.genes, message)
    query = prompts.earth_applications_query(experiment_type, genes, body.spaceConditions)
    ev = await hybrid_earth_applications(
        up, mode=mode, request=request, query=query, search_depth="advanced", include_answer=True,
    )
    return respond(ev, response)


@router.post("/medical-relevance", response_model=ResearchResult)
async def medical_relevance(
    body: MedicalRelevanceBody,
    request: Request,
    response: Response,
    mode: SourceMode = Depends(get_source_mode),
    up: Upstream = Depends(get_upstream),
):
    genes = require_list(body.genes, "Valid gene data is required")
    query = prompts.medical_relevance_query(genes, body.condition)
    ev = await hybrid_medical_relevance(
        up, mode=mode, request=request, query=query, search_depth="advanced", include_answer=True,
    )
    return respond(ev, response)
