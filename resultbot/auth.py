from fastapi import Header, HTTPException, Request, status

from .config import settings
from .security import verify_interaction_signature


async def require_interaction_signature(
    request: Request,
    x_signature_ed25519: str | None = Header(default=None),
    x_signature_timestamp: str | None = Header(default=None),
) -> None:
    if not settings.discord_public_key:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Discord public key not configured")
    if not x_signature_ed25519 or not x_signature_timestamp:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing request signature")

    body = await request.body()
    if not verify_interaction_signature(settings.discord_public_key, x_signature_ed25519, x_signature_timestamp, body):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid request signature")
