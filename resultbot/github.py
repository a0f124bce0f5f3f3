from __future__ import annotations

import logging

import httpx

from .config import settings
from .models import CommitInfo

logger = logging.getLogger(__name__)

_NOT_FOUND_STATUSES = {404, 422}


class CommitLookupFailure(RuntimeError):
    """Raised when GitHub cannot be asked about a commit."""


def _github_headers() -> dict[str, str]:
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
    }
    if settings.github_token:
        headers["Authorization"] = f"Bearer {settings.github_token}"
    return headers


def commit_info_from_payload(payload: dict) -> CommitInfo:
    git_commit = payload.get("commit") or {}
    git_author = git_commit.get("author") or {}
    account = payload.get("author") or {}

    message = str(git_commit.get("message") or "")
    return CommitInfo(
        sha=str(payload.get("sha") or ""),
        author_name=account.get("login") or git_author.get("name") or "unknown",
        author_url=account.get("html_url"),
        avatar_url=account.get("avatar_url"),
        title=message.split("\n")[0],
    )


async def search_commit(client: httpx.AsyncClient, commit_hash: str) -> CommitInfo | None:
    url = f"{settings.github_api_base_url}/repos/{settings.github_repository}/commits/{commit_hash}"
    try:
        response = await client.get(url, headers=_github_headers())
    except httpx.HTTPError as exc:
        raise CommitLookupFailure(f"GitHub request failed: {exc}") from exc

    if response.status_code in _NOT_FOUND_STATUSES:
        logger.info("Commit %s not found on GitHub (status %d)", commit_hash, response.status_code)
        return None

    try:
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPStatusError as exc:
        raise CommitLookupFailure(f"GitHub returned {exc.response.status_code}") from exc
    except ValueError as exc:
        raise CommitLookupFailure(f"GitHub returned malformed JSON: {exc}") from exc

    return commit_info_from_payload(payload)
