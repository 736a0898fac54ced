from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from domain.economy import round_money
from domain.models import PlayerState


class PlayerRegistry:

  def __init__(self, starting_capital: float):
    self.starting_capital = starting_capital
    self._players: Dict[str, PlayerState] = {}  # playerId -> PlayerState

  def __len__(self) -> int:
    return len(self._players)

  def __contains__(self, player_id: str) -> bool:
    return player_id in self._players

  def __iter__(self) -> Iterator[PlayerState]:
    return iter(list(self._players.values()))

  def get(self, player_id: str) -> Optional[PlayerState]:
    return self._players.get(player_id)

  def join(self, player_id: str, name: str) -> PlayerState:
    # rejoin keeps the existing record, name included
    pl = self._players.get(player_id)
    if pl is None:
      pl = PlayerState(player_id, name)
      self._players[player_id] = pl
    return pl

  def apply_round_result(self, player_id: str, pnl: float, round_id: int):
    pl = self._players[player_id]
    pl.cumulative_pnl += pnl
    pl.history.append({"roundId": round_id, "pnl": pnl})

  def leaderboard(self) -> List[Dict]:
    rows = []
    for pl in self._players.values():
      rows.append({
          "name": pl.name,
          "pnl": round_money(pl.cumulative_pnl),
          "capital": round_money(self.starting_capital + pl.cumulative_pnl),
      })
    # stable: ties keep join order
    rows.sort(key=lambda r: r["capital"], reverse=True)
    return rows

  def clear(self):
    self._players.clear()
