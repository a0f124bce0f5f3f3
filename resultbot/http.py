from __future__ import annotations

from collections.abc import AsyncGenerator

import httpx

from .config import settings

USER_AGENT = "resultbot (+https://github.com/LadybirdBrowser/libjs-data)"


def build_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=settings.http_timeout_seconds,
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
    )


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    client = build_client()
    try:
        yield client
    finally:
        await client.aclose()
