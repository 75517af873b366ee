# astrobiogen/routers/groq_router.py
"""
LLM explanations via Groq: gene expression, space effects, planet facts, quizzes.

Each route builds its prompt, asks Groq once, and cleans the text. A missing
GROQ_API_KEY or any upstream failure serves the fixed text for that kind.
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel

from astrobiogen import fallbacks, prompts
from astrobiogen.clients import groq
from astrobiogen.hybrid import SourceMode, get_source_mode, hybridize, respond
from astrobiogen.models import Explanation, PlanetFacts, Quiz, QuizQuestion
from astrobiogen.net import Upstream, get_upstream
from astrobiogen.utils.normalize import completion_text, normalize_explanation, normalize_planet_facts, parse_quiz
from astrobiogen.utils.validation import planet_names, require_list, require_mapping, require_text, validate_limit

router = APIRouter(prefix="/api/groq", tags=["groq"])

# ==============================
# Request bodies (checked by hand so the frontend gets its own messages)
# ==============================

class ExplainGenesBody(BaseModel):
    genes: Any = None
    experiment: Any = None


class SpaceEffectsBody(BaseModel):
    experiment: Any = None
    geneChanges: Any = None


class PlanetFactsBody(BaseModel):
    planet: Any = None


class QuizBody(BaseModel):
    planets: Any = None
    facts: Any = None
    questionCount: Optional[int] = 5

# ==============================
# Live fetchers
# ==============================

async def _quiz_live(up: Upstream, *, prompt: str, question_count: int, **_: Any) -> List[QuizQuestion]:
    payload = await groq.complete(up, prompt=prompt)
    return parse_quiz(completion_text(payload), question_count)


hybrid_explain_genes = hybridize(
    "groq_explain_genes",
    groq.complete,
    fallbacks.gene_explanation,
    normalize=normalize_explanation,
    source_name_live="Groq",
    source_name_fallback="GENE_EXPLANATION_TEXT",
)

hybrid_space_effects = hybridize(
    "groq_space_effects",
    groq.complete,
    fallbacks.space_effects,
    normalize=normalize_explanation,
    source_name_live="Groq",
    source_name_fallback="SPACE_EFFECTS_TEXT",
)

hybrid_planet_facts = hybridize(
    "groq_planet_facts",
    groq.complete,
    fallbacks.planet_facts,
    normalize=normalize_planet_facts,
    source_name_live="Groq",
    source_name_fallback="PLANET_FACTS",
)

hybrid_quiz = hybridize(
    "groq_quiz",
    _quiz_live,
    fallbacks.quiz,
    source_name_live="Groq",
    source_name_fallback="QUIZ_BANK",
)

# ==============================
# Endpoints
# ==============================

@router.post("/explain-genes", response_model=Explanation)
async def explain_genes(
    body: ExplainGenesBody,
    request: Request,
    response: Response,
    mode: SourceMode = Depends(get_source_mode),
    up: Upstream = Depends(get_upstream),
):
    genes = require_list(body.genes, "Valid gene data is required")
    prompt = prompts.gene_expression_prompt(genes, body.experiment)
    ev = await hybrid_explain_genes(up, mode=mode, request=request, prompt=prompt, experiment=body.experiment)
    return respond(ev, response)


@router.post("/explain-space-effects", response_model=Explanation)
async def explain_space_effects(
    body: SpaceEffectsBody,
    request: Request,
    response: Response,
    mode: SourceMode = Depends(get_source_mode),
    up: Upstream = Depends(get_upstream),
):
    message = "Experiment metadata and gene changes are required"
    experiment = require_mapping(body.experiment, message)
    gene_changes = require_mapping(body.geneChanges, message)
    prompt = prompts.space_effects_prompt(experiment, gene_changes)
    ev = await hybrid_space_effects(up, mode=mode, request=request, prompt=prompt, experiment=experiment)
    return respond(ev, response)


@router.post("/planet-facts", response_model=PlanetFacts)
async def planet_facts(
    body: PlanetFactsBody,
    request: Request,
    response: Response,
    mode: SourceMode = Depends(get_source_mode),
    up: Upstream = Depends(get_upstream),
):
    planet = require_text(body.planet, "Planet name is required")
    ev = await hybrid_planet_facts(
        up, mode=mode, request=request, prompt=prompts.planet_facts_prompt(planet), planet=planet
    )
    return respond(ev, response)


@router.post("/generate-quiz", response_model=Quiz)
async def generate_quiz(
    body: QuizBody,
    request: Request,
    response: Response,
    mode: SourceMode = Depends(get_source_mode),
    up: Upstream = Depends(get_upstream),
):
    planets = require_list(body.planets, "Valid planets data is required")
    count = validate_limit(body.questionCount, lo=1, hi=20, field="questionCount", default=5)
    facts = body.facts if isinstance(body.facts, list) else []
    prompt = prompts.quiz_prompt(planet_names(planets), facts, count)
    ev = await hybrid_quiz(up, mode=mode, request=request, prompt=prompt, question_count=count)
    return Quiz(questions=respond(ev, response))
