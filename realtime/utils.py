import logging

from fastapi import WebSocket

from state import GameRoom

logger = logging.getLogger(__name__)


async def send_json_safe(ws: WebSocket, payload: dict):
  try:
    await ws.send_json(payload)
  except Exception:
    # closed sockets are cleaned up by their own receive loop
    logger.debug("send of %s failed", payload.get("type"), exc_info=True)


async def send_to_player(room: GameRoom, player_id: str, payload: dict):
  ws = room.ws_by_player.get(player_id)
  if ws:
    await send_json_safe(ws, payload)


async def broadcast_room(room: GameRoom, payload: dict):
  for ws in list(room.ws_by_player.values()):
    await send_json_safe(ws, payload)


async def send_to_hosts(room: GameRoom, payload: dict):
  for pid in list(room.hosts):
    await send_to_player(room, pid, payload)
