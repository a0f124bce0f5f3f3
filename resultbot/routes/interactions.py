from __future__ import annotations

import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..auth import require_interaction_signature
from ..commands import COMMIT_OPTION, LABELS_OPTION, handle_test_command
from ..feeds import VARIANTS, FetchFailure
from ..http import get_http_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["interactions"])

INTERACTION_PING = 1
INTERACTION_APPLICATION_COMMAND = 2
RESPONSE_PONG = 1
RESPONSE_CHANNEL_MESSAGE_WITH_SOURCE = 4


class InteractionOption(BaseModel):
    name: str
    type: int
    value: str | int | float | bool | None = None


class InteractionData(BaseModel):
    name: str
    options: list[InteractionOption] = Field(default_factory=list)

    def option(self, name: str) -> str | None:
        for option in self.options:
            if option.name == name and option.value is not None:
                return str(option.value)
        return None


class Interaction(BaseModel):
    type: int
    data: InteractionData | None = None


@router.post("/interactions", dependencies=[Depends(require_interaction_signature)])
async def interactions(payload: Interaction, client: httpx.AsyncClient = Depends(get_http_client)):
    if payload.type == INTERACTION_PING:
        return {"type": RESPONSE_PONG}

    if payload.type != INTERACTION_APPLICATION_COMMAND or payload.data is None:
        raise HTTPException(status_code=400, detail="Unsupported interaction type")

    variant = VARIANTS.get(payload.data.name)
    if variant is None:
        raise HTTPException(status_code=400, detail="Unknown command")

    try:
        reply = await handle_test_command(
            client,
            variant,
            commit=payload.data.option(COMMIT_OPTION),
            labels=payload.data.option(LABELS_OPTION),
        )
    except FetchFailure as exc:
        logger.error("Fetching %s results failed: %s", variant.name, exc)
        raise HTTPException(status_code=502, detail=f"Upstream feed error: {exc}")

    return {"type": RESPONSE_CHANNEL_MESSAGE_WITH_SOURCE, "data": reply.to_payload()}
