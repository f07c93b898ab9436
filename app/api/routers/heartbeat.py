from __future__ import annotations

from fastapi import APIRouter

router = APIRouter()


@router.get("/heartbeat")
def heartbeat() -> str:
    return "alive"
