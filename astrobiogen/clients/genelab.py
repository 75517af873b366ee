# astrobiogen/clients/genelab.py
# GeneLab: bundled catalog queries plus an optional live DGE CSV fetch per experiment.

from __future__ import annotations

import csv
import io
from typing import Any, Dict, List, Optional

from astrobiogen import catalog
from astrobiogen.models import Experiment, ExperimentDetail, ExperimentPage
from astrobiogen.net import ConfigMissing, Upstream
from astrobiogen.utils.normalize import calculate_duration, normalize_data_files, normalize_samples


def _matches(value: Optional[str], needle: Optional[str]) -> bool:
    if not needle:
        return True
    return needle.lower() in (value or "").lower()


def list_experiments(
    organism: Optional[str] = None,
    mission: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
) -> ExperimentPage:
    """Case-insensitive substring filters; total is counted before pagination."""
    hits = [
        e for e in catalog.EXPERIMENTS
        if _matches(e.get("organism"), organism) and _matches(e.get("mission"), mission)
    ]
    start = (page - 1) * limit
    return ExperimentPage(
        total=len(hits),
        page=page,
        limit=limit,
        data=[Experiment(**e) for e in hits[start:start + limit]],
    )


def is_known(experiment_id: str) -> bool:
    return experiment_id in catalog.EXPERIMENT_DETAILS or any(e["id"] == experiment_id for e in catalog.EXPERIMENTS)


def get_experiment(experiment_id: str) -> Optional[ExperimentDetail]:
    detail = catalog.EXPERIMENT_DETAILS.get(experiment_id)
    if detail is not None:
        body = dict(detail)
        body["samples"] = normalize_samples(body.get("samples") or [])
        body["dataFiles"] = normalize_data_files(body.get("dataFiles") or [])
        return ExperimentDetail(**body)

    summary = next((e for e in catalog.EXPERIMENTS if e["id"] == experiment_id), None)
    if summary is None:
        return None
    # summary-only experiments get a detail record with what is known
    return ExperimentDetail(
        **summary,
        launchDate=summary.get("date"),
        duration=calculate_duration(summary.get("date"), None),
    )


async def fetch_dge_rows(up: Upstream, *, experiment_id: str, **_: Any) -> List[Dict[str, Any]]:
    """Differential expression rows from GENELAB_DGE_URL, as CSV dicts."""
    template = up.settings.genelab_dge_url
    if not template:
        raise ConfigMissing("genelab", "GENELAB_DGE_URL is not configured")
    text = await up.get_text("genelab", template.format(id=experiment_id))
    return list(csv.DictReader(io.StringIO(text)))
