"""The ``/test262`` and ``/testwasm`` slash commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx

from .emoji import fetch_custom_emojis
from .feeds import VARIANTS, TestVariant, fetch_results
from .github import CommitLookupFailure, search_commit
from .models import Embed
from .render import commit_error_embed, embed_for_result, labels_embed, not_found_embed
from .resolver import RunNotFound, resolve_run

logger = logging.getLogger(__name__)

OPTION_TYPE_STRING = 3
EPHEMERAL_FLAG = 1 << 6
COMMIT_OPTION = "commit"
LABELS_OPTION = "labels"
LABELS_CHOICE = "labels"


def command_definitions() -> list[dict]:
    return [
        {
            "name": variant.name,
            "description": variant.description,
            "options": [
                {
                    "type": OPTION_TYPE_STRING,
                    "name": COMMIT_OPTION,
                    "description": "The commit to use the results from",
                    "required": False,
                },
                {
                    "type": OPTION_TYPE_STRING,
                    "name": LABELS_OPTION,
                    "description": "Print the meaning of label emojis",
                    "required": False,
                    "choices": [{"name": LABELS_CHOICE, "value": LABELS_CHOICE}],
                },
            ],
        }
        for variant in VARIANTS.values()
    ]


@dataclass
class CommandReply:
    embeds: list[Embed] = field(default_factory=list)
    ephemeral: bool = False

    def to_payload(self) -> dict:
        payload: dict = {"embeds": [embed.to_payload() for embed in self.embeds]}
        if self.ephemeral:
            payload["flags"] = EPHEMERAL_FLAG
        return payload


async def handle_test_command(
    client: httpx.AsyncClient,
    variant: TestVariant,
    commit: str | None = None,
    labels: str | None = None,
) -> CommandReply:
    """Build the reply for one invocation of a results command.

    Raises :class:`~resultbot.feeds.FetchFailure` when the feed is unavailable;
    every other problem is reported inside the reply.
    """

    results = await fetch_results(client, variant)
    emojis = await fetch_custom_emojis(client)

    try:
        result, previous_result = resolve_run(results, None if labels == LABELS_CHOICE else commit)
    except RunNotFound as exc:
        logger.info("No %s run found for commit %r", variant.name, exc.commit)
        return CommandReply(embeds=[not_found_embed(variant, exc.commit, emojis)], ephemeral=True)

    if labels == LABELS_CHOICE:
        return CommandReply(embeds=[labels_embed(result, emojis)], ephemeral=True)

    commit_hash = result.primary_commit
    try:
        commit_info = await search_commit(client, commit_hash)
    except CommitLookupFailure as exc:
        logger.warning("Commit lookup for %s failed: %s", commit_hash, exc)
        commit_info = None

    if commit_info is None:
        return CommandReply(embeds=[commit_error_embed(variant, commit_hash, emojis)])

    return CommandReply(embeds=[embed_for_result(commit_info, result, previous_result, emojis)])
