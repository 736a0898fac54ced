import logging
import time
from typing import Optional

from fastapi import Query, WebSocket, WebSocketDisconnect

from domain import projector
from realtime.handlers import dispatch
from realtime.utils import send_json_safe
from state import GameRoom

logger = logging.getLogger(__name__)


async def ws_endpoint(ws: WebSocket,
                      playerId: Optional[str] = Query(default=None),
                      token: Optional[str] = Query(default=None)):
  room: GameRoom = ws.app.state.room
  await ws.accept()

  # restore playerId only with its reconnect token, else issue a fresh one
  pid, token = room.claim(playerId, token)
  room.attach(pid, ws)
  logger.info("[%s] connected: %s", room.session.game_id, pid)

  # greet
  await send_json_safe(ws, {"type": "hello", "playerId": pid, "token": token})
  await send_json_safe(ws, projector.public_snapshot(room.session))

  try:
    while True:
      try:
        msg = await ws.receive_json()
      except (ValueError, KeyError, TypeError):
        # not JSON, or a binary frame
        logger.debug("[%s] unreadable frame from %s", room.session.game_id,
                     pid)
        continue
      if not isinstance(msg, dict):
        continue
      if msg.get("type") == "ping":
        await send_json_safe(ws, {"type": "pong", "ts": time.time()})
        continue
      try:
        await dispatch(room, pid, msg)
      except Exception:
        logger.exception("[%s] unhandled error in %s from %s",
                         room.session.game_id, msg.get("type"), pid)

  except WebSocketDisconnect:
    pass
  finally:
    # the player record stays for reconnection by playerId + token
    room.detach(pid, ws)
    logger.info("[%s] disconnected: %s", room.session.game_id, pid)
