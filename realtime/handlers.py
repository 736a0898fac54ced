# realtime/handlers.py
"""
One coroutine per inbound message type.

Each handler mutates the room's session/registry synchronously, builds its
payloads, then sends them. Guard rejections and malformed payloads are
dropped without a reply.
"""
from __future__ import annotations

import logging
from typing import Awaitable, Callable, Dict

from pydantic import ValidationError

from domain import projector
from domain.economy import InsufficientFunds, capital_of
from domain.models import END
from realtime.schemas import HostJoinIn, JoinIn, SubmitVotesIn
from realtime.utils import (broadcast_room, send_to_hosts, send_to_player)
from state import GameRoom

logger = logging.getLogger(__name__)

Handler = Callable[[GameRoom, str, dict], Awaitable[None]]


async def broadcast_state(room: GameRoom):
  await broadcast_room(room, projector.public_snapshot(room.session))


# ---------- Player commands ----------
async def handle_join(room: GameRoom, pid: str, msg: dict):
  req = JoinIn.model_validate(msg)
  name = req.name.strip() or f"User-{pid[:4]}"
  pl = room.registry.join(pid, name)
  await send_to_player(
      room, pid,
      projector.joined_payload(pl, capital_of(pl, room.starting_capital),
                               room.starting_capital))
  await broadcast_state(room)


async def handle_submit_votes(room: GameRoom, pid: str, msg: dict):
  req = SubmitVotesIn.model_validate(msg)
  if not room.session.accept_votes(pid, req.to_bet_set()):
    return
  await send_to_player(room, pid, projector.votes_received_payload())
  await send_to_hosts(room,
                      projector.vote_count_payload(room.session.vote_count))


async def handle_buy_tip(room: GameRoom, pid: str, msg: dict):
  try:
    bought = room.session.buy_tip(pid)
  except InsufficientFunds as e:
    await send_to_player(
        room, pid,
        projector.tip_error_payload(
            f"Not enough capital: the tip costs {e.cost:,.2f}, "
            f"you have {e.capital:,.2f}."))
    return
  if bought is None:
    return
  tip, capital = bought
  await send_to_player(room, pid,
                       projector.tip_revealed_payload(tip, room.session.tip_cost))
  await send_to_player(room, pid, projector.capital_update_payload(capital))
  await broadcast_state(room)


# ---------- Host commands ----------
async def handle_host_join(room: GameRoom, pid: str, msg: dict):
  req = HostJoinIn.model_validate(msg)
  if room.host_token and req.token != room.host_token:
    logger.warning("[%s] hostJoin with a bad token from %s",
                   room.session.game_id, pid)
    return
  room.hosts.add(pid)
  await send_to_player(room, pid, projector.host_joined_payload())
  await broadcast_state(room)


async def handle_host_start_round(room: GameRoom, pid: str, msg: dict):
  room.session.start_round()
  await broadcast_state(room)


async def handle_host_open_voting(room: GameRoom, pid: str, msg: dict):
  if room.session.open_voting():
    await broadcast_state(room)


async def handle_host_reveal(room: GameRoom, pid: str, msg: dict):
  results = room.session.reveal()
  if results is None:
    return
  for res in results:
    await send_to_player(room, res.player_id,
                         projector.round_result_payload(res))
  await broadcast_state(room)


async def handle_host_next_round(room: GameRoom, pid: str, msg: dict):
  phase = room.session.next_round()
  if phase is None:
    return
  snapshot = projector.public_snapshot(room.session)
  finals = {}
  if phase == END:
    board = room.registry.leaderboard()
    for pl in room.registry:
      finals[pl.player_id] = projector.final_result_payload(
          capital_of(pl, room.starting_capital), board)
  await broadcast_room(room, snapshot)
  for player_id, payload in finals.items():
    await send_to_player(room, player_id, payload)


async def handle_host_reset(room: GameRoom, pid: str, msg: dict):
  room.session.reset()
  await broadcast_state(room)


PLAYER_HANDLERS: Dict[str, Handler] = {
    "join": handle_join,
    "submitVotes": handle_submit_votes,
    "buyTip": handle_buy_tip,
}

HOST_HANDLERS: Dict[str, Handler] = {
    "hostStartRound": handle_host_start_round,
    "hostOpenVoting": handle_host_open_voting,
    "hostReveal": handle_host_reveal,
    "hostNextRound": handle_host_next_round,
    "hostReset": handle_host_reset,
}


async def dispatch(room: GameRoom, pid: str, msg: dict) -> bool:
  """
  Route one message under the room lock. Returns False when the message
  was dropped (unknown type, not a host, invalid payload).
  """
  mtype = msg.get("type")
  if mtype == "hostJoin":
    handler = handle_host_join
  elif mtype in HOST_HANDLERS:
    if not room.is_host(pid):
      logger.debug("[%s] %s from non-host %s ignored", room.session.game_id,
                   mtype, pid)
      return False
    handler = HOST_HANDLERS[mtype]
  elif mtype in PLAYER_HANDLERS:
    handler = PLAYER_HANDLERS[mtype]
  else:
    return False

  async with room.lock:
    try:
      await handler(room, pid, msg)
    except ValidationError:
      logger.debug("[%s] invalid %s payload from %s", room.session.game_id,
                   mtype, pid)
      return False
  return True
