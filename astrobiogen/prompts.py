# astrobiogen/prompts.py
# Prompt and query builders. Plain string templates; no conversation state is kept.

from __future__ import annotations

from typing import Any, Dict, List, Optional

PLAIN_TEXT_RULES = (
    "Format your response as plain text without markdown formatting or headers. "
    "Use clear paragraphs with proper spacing. Do not use bold, italics, or other formatting. "
    "Do not include section headers or titles in your response."
)

BIOLOGY_SYSTEM_PROMPT = (
    "You are a helpful space biology expert that explains complex genetic concepts clearly and accurately. "
    + PLAIN_TEXT_RULES
)

RESEARCH_KEYWORDS = ("research", "discovery", "mission", "spacecraft", "recent", "latest", "study", "scientist")


def _meta(experiment: Optional[Dict[str, Any]]) -> Dict[str, str]:
    m = experiment if isinstance(experiment, dict) else {}
    return {
        "title": m.get("title") or "Unknown Experiment",
        "organism": m.get("organism") or "Unknown Organism",
        "tissue": m.get("tissue") or "Unknown Tissue",
        "mission": m.get("mission") or "Unknown Mission",
        "duration": m.get("duration") or "Unknown Duration",
    }


def _experiment_block(meta: Dict[str, str]) -> str:
    return (
        "Experiment details:\n"
        f"- Title: {meta['title']}\n"
        f"- Organism: {meta['organism']}\n"
        f"- Tissue: {meta['tissue']}\n"
        f"- Mission: {meta['mission']}\n"
        f"- Duration: {meta['duration']}"
    )


def _fold_change(gene: Dict[str, Any]) -> Optional[float]:
    fc = gene.get("fold_change")
    return float(fc) if isinstance(fc, (int, float)) and not isinstance(fc, bool) else None


def format_gene(gene: Dict[str, Any]) -> str:
    fc = _fold_change(gene)
    fold = f"{fc:.2f}" if fc is not None else "Unknown"
    return (
        f"{gene.get('gene_symbol') or 'Unknown'} ({gene.get('gene_name') or 'Unknown'}): "
        f"{fold} fold change, p-value: {gene.get('p_value') or 'Unknown'}. "
        f"Function: {gene.get('function') or 'Unknown function'}"
    )


def gene_expression_prompt(genes: List[Dict[str, Any]], experiment: Optional[Dict[str, Any]]) -> str:
    meta = _meta(experiment)
    scored = [g for g in genes if isinstance(g, dict) and _fold_change(g) is not None]
    up = sorted((g for g in scored if _fold_change(g) > 0), key=_fold_change, reverse=True)[:5]
    down = sorted((g for g in scored if _fold_change(g) < 0), key=_fold_change)[:5]
    up_text = "\n".join(format_gene(g) for g in up) or "No significantly upregulated genes found"
    down_text = "\n".join(format_gene(g) for g in down) or "No significantly downregulated genes found"
    return f"""
You are a space biology expert explaining gene expression changes in a space experiment to a scientifically literate audience.

{_experiment_block(meta)}

Top upregulated genes (increased expression in space):
{up_text}

Top downregulated genes (decreased expression in space):
{down_text}

Please provide:
1. A clear explanation of what these gene expression changes mean biologically
2. How microgravity and/or space radiation likely caused these changes
3. What cellular pathways or processes are most affected
4. The potential physiological impact on the organism

{PLAIN_TEXT_RULES}

Keep your explanation scientifically accurate but accessible to someone with basic biology knowledge. Use about 250-300 words.
"""


def space_effects_prompt(experiment: Optional[Dict[str, Any]], gene_changes: Optional[Dict[str, Any]]) -> str:
    meta = _meta(experiment)
    changes = gene_changes if isinstance(gene_changes, dict) else {}
    upregulated = changes.get("upregulated") or "Unknown number of"
    downregulated = changes.get("downregulated") or "Unknown number of"
    pathways = changes.get("topPathways")
    top_pathways = ", ".join(str(p) for p in pathways) if isinstance(pathways, list) else "Unknown pathways"
    return f"""
You are a space biology expert explaining how the space environment affects living organisms at the molecular level.

{_experiment_block(meta)}

Gene expression changes summary:
- {upregulated} genes significantly upregulated
- {downregulated} genes significantly downregulated
- Top affected pathways: {top_pathways}

Please explain:
1. How microgravity specifically affects cells and tissues in this experiment
2. How space radiation may have contributed to these changes
3. Why these particular biological pathways are sensitive to the space environment
4. How these molecular changes connect to known physiological effects of spaceflight

{PLAIN_TEXT_RULES}

Keep your explanation scientifically accurate but accessible to someone with basic biology knowledge. Use about 250-300 words.
"""


def planet_facts_prompt(planet: str) -> str:
    return f"""
Generate 5 interesting and educational facts about the planet {planet}.
These facts should be accurate, concise, and suitable for a student learning about the solar system.
Format the response as a simple array of facts, with each fact being 1-2 sentences long.
Do not include any markdown formatting, numbering, or bullet points.
"""


def quiz_prompt(planet_names: List[str], facts: List[str], question_count: int) -> str:
    facts_text = "\n".join(str(f) for f in facts)
    return f"""
Generate {question_count} multiple-choice quiz questions about the solar system, focusing on these planets: {', '.join(planet_names)}.
Base the questions on these facts that the user has learned:

{facts_text}

Each question should have 4 options with only one correct answer.
Format the response as a JSON array of objects, where each object has:
- "question": the question text
- "options": an array of 4 possible answers
- "correctAnswer": the correct answer (which must be one of the options)

Make sure the questions are educational, accurate, and appropriate for students learning about the solar system.
"""


def planet_chat_system_prompt(planet: str) -> str:
    return (
        f"You are an expert on the planet {planet}. Provide accurate, educational information about {planet} "
        "in response to user questions. Keep responses concise but informative. "
        "Format your response as plain text without markdown formatting or headers."
    )


def _symbols(genes: List[Any], limit: Optional[int] = None) -> List[str]:
    out = []
    for g in genes:
        sym = g.get("gene_symbol") if isinstance(g, dict) else g
        if isinstance(sym, str) and sym.strip():
            out.append(sym.strip())
    return out[:limit] if limit else out


def earth_applications_query(experiment_type: str, genes: List[Any], space_conditions: Optional[str]) -> str:
    return (
        f"Earth-based medical or biotechnology applications of {experiment_type} research in space, "
        f"focusing on genes {', '.join(_symbols(genes, 5))} affected by {space_conditions or 'microgravity'}"
    )


def medical_relevance_query(genes: List[Any], condition: Optional[str] = None) -> str:
    q = f"Medical relevance and disease associations of genes {', '.join(_symbols(genes))}"
    if condition:
        q += f" in relation to {condition}"
    return q


def chat_research_query(message: str, planet: str) -> str:
    return f"{message} about planet {planet}"


def wants_research(message: str) -> bool:
    m = (message or "").lower()
    return any(k in m for k in RESEARCH_KEYWORDS)
