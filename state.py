from __future__ import annotations

import asyncio
import random
import secrets
import string
from typing import Dict, Optional, Set, Tuple

from fastapi import WebSocket

import config
from domain.catalog import RoundCatalog
from domain.registry import PlayerRegistry
from domain.session import GameSession


class GameRoom:
    """
    One running game plus the sockets attached to it.

    Connections are keyed by player id, not by socket, so a client that
    reconnects with the same id and token keeps its player record.
    """

    def __init__(
        self,
        catalog: Optional[RoundCatalog] = None,
        *,
        starting_capital: float = config.STARTING_CAPITAL,
        voting_window_seconds: int = config.VOTING_WINDOW_SECONDS,
        tip_cost: float = config.TIP_COST,
        host_token: Optional[str] = config.HOST_TOKEN,
        game_id: str = "main",
        **session_kwargs,
    ):
        self.registry = PlayerRegistry(starting_capital)
        self.session = GameSession(
            catalog or RoundCatalog(),
            self.registry,
            voting_window_seconds=voting_window_seconds,
            tip_cost=tip_cost,
            game_id=game_id,
            **session_kwargs,
        )
        self.host_token = host_token
        # commands for this game are applied one at a time
        self.lock = asyncio.Lock()

        # ---- Connections ----
        self.ws_by_player: Dict[str, WebSocket] = {}   # playerId -> ws
        self.hosts: Set[str] = set()                   # playerIds in the host room
        self.tokens: Dict[str, str] = {}               # playerId -> reconnect token

    @property
    def starting_capital(self) -> float:
        return self.registry.starting_capital

    def claim(self, player_id: Optional[str], token: Optional[str]) -> Tuple[str, str]:
        """
        Resolve the id a connection will act as.

        A known id is only handed back with its reconnect token; without it
        the connection gets a fresh id. Returns (player_id, token).
        """
        known = self.tokens.get(player_id) if player_id else None
        if known is not None:
            if token and secrets.compare_digest(token, known):
                return player_id, known
            player_id = None
        pid = player_id or gen_player_id()
        self.tokens[pid] = secrets.token_hex(16)
        return pid, self.tokens[pid]

    def attach(self, player_id: str, ws: WebSocket) -> None:
        self.ws_by_player[player_id] = ws

    def detach(self, player_id: str, ws: WebSocket) -> None:
        # a newer socket may already have taken over this id
        if self.ws_by_player.get(player_id) is ws:
            self.ws_by_player.pop(player_id, None)
            self.hosts.discard(player_id)

    def is_host(self, player_id: str) -> bool:
        return player_id in self.hosts


# ---- ID generators ----
def gen_player_id() -> str:
    """Generate a short opaque player id, e.g. 'k8z2q1m9d0'."""
    return "".join(random.choices(string.ascii_lowercase + string.digits, k=10))
