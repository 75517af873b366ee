# astrobiogen/clients/groq.py
# Groq chat completions (OpenAI-compatible endpoint).

from __future__ import annotations

from typing import Any, Dict, List, Optional

from astrobiogen.net import Upstream
from astrobiogen.prompts import BIOLOGY_SYSTEM_PROMPT


async def complete(
    up: Upstream,
    *,
    prompt: Optional[str] = None,
    messages: Optional[List[Dict[str, str]]] = None,
    system: str = BIOLOGY_SYSTEM_PROMPT,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    **_: Any,
) -> Dict[str, Any]:
    """Either a single user `prompt` under `system`, or a full `messages` list."""
    if messages is None:
        messages = [
            {"role": "system", "content": system},
            {"role": "user", "content": prompt or ""},
        ]
    s = up.settings
    payload = {
        "model": s.groq_model,
        "messages": messages,
        "temperature": s.groq_temperature if temperature is None else temperature,
        "max_tokens": s.groq_max_tokens if max_tokens is None else max_tokens,
    }
    return await up.post_json("groq", "/chat/completions", payload, shape=dict)
