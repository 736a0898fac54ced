from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

# ---------- Phases ----------
LOBBY = "lobby"
NEWS = "news"
VOTING = "voting"
REVEAL = "reveal"
END = "end"

# ---------- Bet directions ----------
LONG = "long"
SHORT = "short"
SKIP = "skip"
DIRECTIONS = (LONG, SHORT, SKIP)
DIRECTION_SIGN = {LONG: 1, SHORT: -1, SKIP: 0}


@dataclass(frozen=True)
class Round:
  id: int
  title: str
  news: str
  markets: Tuple[str, ...]
  # movements[m] = signed % price change, hidden until reveal
  movements: Mapping[str, float]
  analysis: str
  tip: Optional[str] = None


@dataclass(frozen=True)
class Bet:
  direction: str
  amount: float = 0.0
  multiplier: float = 1.0


BetSet = Dict[str, Bet]  # market -> Bet


class PlayerState:

  def __init__(self, player_id: str, name: str):
    self.player_id = player_id
    self.name = name
    self.cumulative_pnl: float = 0.0
    # history = [{"roundId": int, "pnl": float}, ...]
    self.history: List[Dict] = []
    self.tips_bought: int = 0


@dataclass
class SessionState:
  phase: str = LOBBY  # lobby | news | voting | reveal | end
  current_round_index: int = 0
  voting_open: bool = False
  timer_end: Optional[int] = None  # epoch ms
  pending_votes: Dict[str, BetSet] = field(default_factory=dict)
  votes_processed: bool = False
  tip_revealed_this_round: bool = False
