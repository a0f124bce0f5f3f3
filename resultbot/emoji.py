from __future__ import annotations

import logging

import httpx

from .config import settings
from .icons import NO_CUSTOM_EMOJIS, CustomEmojis

logger = logging.getLogger(__name__)


def _discord_headers() -> dict[str, str]:
    return {"Authorization": f"Bot {settings.discord_bot_token}"}


def emoji_markup(emoji: dict) -> str | None:
    emoji_id = emoji.get("id")
    name = emoji.get("name")
    if not emoji_id or not name:
        return None
    prefix = "a" if emoji.get("animated") else ""
    return f"<{prefix}:{name}:{emoji_id}>"


def _find_emoji(emojis: list[dict], name: str) -> str | None:
    for emoji in emojis:
        if emoji.get("name") == name:
            return emoji_markup(emoji)
    return None


async def fetch_custom_emojis(client: httpx.AsyncClient) -> CustomEmojis:
    """Resolve the bot's custom emojis from the configured guild.

    Missing configuration or any lookup failure yields no custom emojis, so
    callers always fall back to plain-text icons.
    """

    if not settings.discord_bot_token or not settings.discord_guild_id:
        return NO_CUSTOM_EMOJIS

    url = f"{settings.discord_api_base_url}/guilds/{settings.discord_guild_id}/emojis"
    try:
        response = await client.get(url, headers=_discord_headers())
        response.raise_for_status()
        emojis = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Custom emoji lookup failed, using fallbacks: %s", exc)
        return NO_CUSTOM_EMOJIS

    if not isinstance(emojis, list):
        logger.warning("Custom emoji lookup returned %s, using fallbacks", type(emojis).__name__)
        return NO_CUSTOM_EMOJIS

    return CustomEmojis(
        ladybird=_find_emoji(emojis, settings.ladybird_emoji_name),
        makemore=_find_emoji(emojis, settings.makemore_emoji_name),
        sadcaret=_find_emoji(emojis, settings.sadcaret_emoji_name),
    )
