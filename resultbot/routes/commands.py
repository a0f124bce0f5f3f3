from fastapi import APIRouter

from ..commands import command_definitions

router = APIRouter(prefix="/v1", tags=["commands"])


@router.get("/health")
def health():
    return {"ok": True}


@router.get("/commands")
def commands():
    definitions = command_definitions()
    return {"count": len(definitions), "data": definitions}
