# astrobiogen/clients/nasa.py
# NASA Image and Video Library search, Astronomy Picture of the Day.

from __future__ import annotations

from typing import Any, Dict

from astrobiogen.net import Upstream


async def search_images(up: Upstream, *, query: str, count: int = 5, **_: Any) -> Dict[str, Any]:
    params = {"q": query, "media_type": "image", "page": 1, "page_size": count}
    return await up.get_json("nasa_images", "/search", params=params, shape=dict)


async def apod(up: Upstream, **_: Any) -> Dict[str, Any]:
    return await up.get_json("nasa_api", "/planetary/apod", shape=dict)
