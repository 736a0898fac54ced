# api/routes.py
from fastapi import APIRouter, Request

from domain import projector

router = APIRouter(prefix="/api")


@router.get("/state")
async def get_state(request: Request):
    """Same public snapshot the WebSocket clients receive."""
    return projector.public_snapshot(request.app.state.room.session)


@router.get("/leaderboard")
async def get_leaderboard(request: Request):
    return projector.leaderboard_payload(request.app.state.room.session)
