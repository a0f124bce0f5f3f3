"""Test result feeds and the fetcher that downloads them."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx
from pydantic import TypeAdapter, ValidationError

from .config import settings
from .models import RunRecord

logger = logging.getLogger(__name__)


class FetchFailure(RuntimeError):
    """Raised when a results feed cannot be downloaded or parsed."""


@dataclass(frozen=True)
class TestVariant:
    __test__ = False

    name: str
    description: str
    url: str
    name_for_commit_error: str


VARIANTS: dict[str, TestVariant] = {
    "test262": TestVariant(
        name="test262",
        description="Display LibJS test262 results",
        url=settings.test262_results_url,
        name_for_commit_error="test262",
    ),
    "testwasm": TestVariant(
        name="testwasm",
        description="Display Wasm spec test results",
        url=settings.testwasm_results_url,
        name_for_commit_error="Wasm spec tests",
    ),
}

_RUN_SEQUENCE = TypeAdapter(list[RunRecord])


def parse_results(payload: object) -> list[RunRecord]:
    try:
        return _RUN_SEQUENCE.validate_python(payload)
    except ValidationError as exc:
        raise FetchFailure(f"unexpected results payload: {exc.error_count()} validation error(s)") from exc


async def fetch_results(client: httpx.AsyncClient, variant: TestVariant) -> list[RunRecord]:
    """Download and parse the run sequence of ``variant``, oldest run first."""

    try:
        response = await client.get(variant.url)
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPError as exc:
        raise FetchFailure(f"failed to fetch {variant.url}: {exc}") from exc
    except ValueError as exc:
        raise FetchFailure(f"malformed JSON from {variant.url}: {exc}") from exc

    results = parse_results(payload)
    logger.debug("Fetched %d %s runs", len(results), variant.name)
    return results
