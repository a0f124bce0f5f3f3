#!/usr/bin/env python3
"""Register the results slash commands with Discord.

Overwrites the application's global commands, or the commands of
DISCORD_GUILD_ID when --guild is passed.
"""
import argparse
import json
import sys

import httpx

from resultbot.commands import command_definitions
from resultbot.config import settings


def commands_url(guild: bool) -> str:
    base = f"{settings.discord_api_base_url}/applications/{settings.discord_application_id}"
    if guild:
        return f"{base}/guilds/{settings.discord_guild_id}/commands"
    return f"{base}/commands"


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--guild", action="store_true", help="register for DISCORD_GUILD_ID only")
    parser.add_argument("--dry-run", action="store_true", help="print the definitions instead of uploading")
    args = parser.parse_args()

    definitions = command_definitions()
    if args.dry_run:
        print(json.dumps(definitions, indent=2))
        return 0

    if not settings.discord_bot_token or not settings.discord_application_id:
        print("DISCORD_BOT_TOKEN and DISCORD_APPLICATION_ID are required", file=sys.stderr)
        return 2
    if args.guild and not settings.discord_guild_id:
        print("DISCORD_GUILD_ID is required with --guild", file=sys.stderr)
        return 2

    with httpx.Client(timeout=settings.http_timeout_seconds) as client:
        response = client.put(
            commands_url(args.guild),
            json=definitions,
            headers={"Authorization": f"Bot {settings.discord_bot_token}"},
        )

    if response.is_error:
        print(f"Registration failed ({response.status_code}): {response.text}", file=sys.stderr)
        return 1

    names = ", ".join(f"/{command['name']}" for command in response.json())
    print(f"Registered {names}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
