# astrobiogen/clients/tavily.py
# Tavily web research.

from __future__ import annotations

from typing import Any, Dict

from astrobiogen.net import Upstream


async def search(
    up: Upstream,
    *,
    query: str,
    search_depth: str = "advanced",
    include_answer: bool = True,
    include_images: bool = False,
    include_raw_content: bool = False,
    max_results: int = 5,
    **_: Any,
) -> Dict[str, Any]:
    payload = {
        "query": query,
        "search_depth": search_depth,
        "include_answer": include_answer,
        "include_images": include_images,
        "include_raw_content": include_raw_content,
        "max_results": max_results,
    }
    return await up.post_json("tavily", "/search", payload, shape=dict)
