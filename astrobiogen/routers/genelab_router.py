# astrobiogen/routers/genelab_router.py
"""
GeneLab experiments and differential gene expression.

Experiment summaries and details come from the bundled catalog. Gene lists are
read live from GENELAB_DGE_URL when it is configured and otherwise come from the
bundled gene sets; the X-Degraded header says which one answered.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from astrobiogen import fallbacks
from astrobiogen.clients import genelab
from astrobiogen.hybrid import SourceMode, get_source_mode, hybridize, respond
from astrobiogen.models import ExperimentDetail, ExperimentPage, GeneRecord
from astrobiogen.net import Upstream, get_upstream
from astrobiogen.utils.normalize import normalize_gene_rows, sort_genes
from astrobiogen.utils.validation import validate_limit, validate_sort

router = APIRouter(prefix="/api/genelab", tags=["genelab"])

hybrid_genes = hybridize(
    "genelab_genes",
    genelab.fetch_dge_rows,
    fallbacks.genes,
    normalize=normalize_gene_rows,
    source_name_live="GeneLab",
    source_name_fallback="GeneLab_CATALOG",
)

# ==============================
# Endpoints
# ==============================

@router.get("/experiments", response_model=ExperimentPage)
async def list_experiments(
    page: int = 1,
    limit: int = 10,
    organism: Optional[str] = None,
    mission: Optional[str] = None,
):
    page = validate_limit(page, lo=1, hi=10_000, field="page", default=1)
    limit = validate_limit(limit, lo=1, hi=100, field="limit", default=10)
    return genelab.list_experiments(organism=organism, mission=mission, page=page, limit=limit)


@router.get("/experiments/{experiment_id}", response_model=ExperimentDetail)
async def get_experiment(experiment_id: str):
    detail = genelab.get_experiment(experiment_id)
    if detail is None:
        raise HTTPException(status_code=500, detail="Failed to fetch experiment details")
    return detail


@router.get("/experiments/{experiment_id}/genes", response_model=List[GeneRecord])
async def get_genes(
    experiment_id: str,
    request: Request,
    response: Response,
    limit: int = 100,
    sort: str = "fold_change",
    order: str = "desc",
    mode: SourceMode = Depends(get_source_mode),
    up: Upstream = Depends(get_upstream),
):
    if not genelab.is_known(experiment_id):
        raise HTTPException(status_code=500, detail="Failed to fetch gene expression data")
    sort = validate_sort(sort)
    limit = validate_limit(limit, lo=1, hi=1000, field="limit", default=100)

    ev = await hybrid_genes(up, mode=mode, request=request, experiment_id=experiment_id)
    return sort_genes(respond(ev, response), sort=sort, order=order, limit=limit)
