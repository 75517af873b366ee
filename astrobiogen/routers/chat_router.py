# astrobiogen/routers/chat_router.py
"""
Planet chat. Research-style questions go to Tavily when a key is configured,
everything else to Groq with a planet-expert system prompt. Both paths fall
back to the built-in planet notes.
"""

import re
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel

from astrobiogen import fallbacks, prompts
from astrobiogen.clients import groq, tavily
from astrobiogen.hybrid import SourceMode, get_source_mode, hybridize, respond
from astrobiogen.models import ChatMessage, ChatReply
from astrobiogen.net import Upstream, get_upstream
from astrobiogen.utils.normalize import normalize_chat_completion, normalize_tavily_answer

router = APIRouter(prefix="/api/chat", tags=["chat"])

PLANET_RE = re.compile(r"expert on the planet ([A-Za-z]+)")

CHAT_TEMPERATURE = 0.7
CHAT_MAX_TOKENS = 500


class ChatBody(BaseModel):
    messages: Any = None


def _parse_messages(raw: Any) -> List[ChatMessage]:
    if not isinstance(raw, list):
        raise HTTPException(status_code=400, detail="Invalid request format. Messages array is required.")
    out = []
    for m in raw:
        if isinstance(m, dict) and isinstance(m.get("role"), str):
            out.append(ChatMessage(role=m["role"], content=str(m.get("content") or "")))
    return out


def extract_planet(messages: List[ChatMessage]) -> str:
    system = next((m.content for m in messages if m.role == "system"), "")
    match = PLANET_RE.search(system)
    return match.group(1) if match else "unknown"


def last_user_message(messages: List[ChatMessage]) -> str:
    return next((m.content for m in reversed(messages) if m.role == "user"), "")


async def _groq_chat(up: Upstream, *, planet: str, history: List[Dict[str, str]], **_: Any) -> Dict[str, Any]:
    messages = [{"role": "system", "content": prompts.planet_chat_system_prompt(planet)}] + history
    return await groq.complete(up, messages=messages, temperature=CHAT_TEMPERATURE, max_tokens=CHAT_MAX_TOKENS)


async def _tavily_chat(up: Upstream, *, planet: str, message: str, **_: Any) -> Dict[str, Any]:
    return await tavily.search(
        up,
        query=prompts.chat_research_query(message, planet),
        search_depth="basic",
        include_answer=True,
    )


hybrid_chat_groq = hybridize(
    "chat_groq",
    _groq_chat,
    fallbacks.chat,
    normalize=normalize_chat_completion,
    source_name_live="Groq",
    source_name_fallback="PLANET_NOTES",
)

hybrid_chat_tavily = hybridize(
    "chat_tavily",
    _tavily_chat,
    fallbacks.chat,
    normalize=normalize_tavily_answer,
    source_name_live="Tavily",
    source_name_fallback="PLANET_NOTES",
)


@router.post("", response_model=ChatReply)
async def chat(
    body: ChatBody,
    request: Request,
    response: Response,
    mode: SourceMode = Depends(get_source_mode),
    up: Upstream = Depends(get_upstream),
):
    messages = _parse_messages(body.messages)
    planet = extract_planet(messages)
    message = last_user_message(messages)
    history = [{"role": m.role, "content": m.content} for m in messages if m.role != "system"]

    wrapper = hybrid_chat_groq
    if prompts.wants_research(message) and up.settings.tavily_api_key:
        wrapper = hybrid_chat_tavily
    ev = await wrapper(up, mode=mode, request=request, planet=planet, message=message, history=history)
    return respond(ev, response)
