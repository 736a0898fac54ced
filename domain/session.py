# domain/session.py
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from domain.catalog import RoundCatalog
from domain.economy import buy_tip, capital_of, compute_round_pnl
from domain.models import (END, LOBBY, NEWS, REVEAL, VOTING, BetSet, Round,
                           SessionState)
from domain.registry import PlayerRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundResult:
  player_id: str
  pnl: float
  total_capital: float


class GameSession:
  """
  Host-driven round state machine for one game.

      lobby -> news -> voting -> reveal -> news -> ... -> end
      reset: any -> lobby

  Every command checks a named guard first. A failed guard leaves the state
  untouched and the command returns False/None without raising; callers do
  not surface it to clients.
  """

  def __init__(self,
               catalog: RoundCatalog,
               registry: PlayerRegistry,
               *,
               voting_window_seconds: int = 60,
               tip_cost: float = 500.0,
               clock: Callable[[], float] = time.time,
               game_id: str = "main"):
    self.catalog = catalog
    self.registry = registry
    self.voting_window_seconds = voting_window_seconds
    self.tip_cost = tip_cost
    self.clock = clock
    self.game_id = game_id
    self.state = SessionState()

  # ---------- Read helpers ----------
  @property
  def phase(self) -> str:
    return self.state.phase

  def current_round(self) -> Optional[Round]:
    if self.state.phase == LOBBY:
      return None
    return self.catalog.get(self.state.current_round_index)

  @property
  def vote_count(self) -> int:
    return len(self.state.pending_votes)

  # ---------- Guards ----------
  def can_open_voting(self) -> bool:
    return self.state.phase == NEWS and self.current_round() is not None

  def can_reveal(self) -> bool:
    return (self.state.phase == VOTING and not self.state.votes_processed and
            self.current_round() is not None)

  def can_advance(self) -> bool:
    return self.state.phase == REVEAL

  def can_accept_votes(self, player_id: str) -> bool:
    return self.state.voting_open and player_id in self.registry

  def can_buy_tip(self, player_id: str) -> bool:
    rnd = self.current_round()
    return (self.state.phase in (NEWS, VOTING) and rnd is not None and
            rnd.tip is not None and player_id in self.registry)

  def _rejected(self, command: str) -> None:
    logger.debug("[%s] %s ignored in phase=%s", self.game_id, command,
                 self.state.phase)

  # ---------- Transitions ----------
  def start_round(self) -> bool:
    st = self.state
    st.phase = NEWS
    st.current_round_index = 0
    self._clear_round()
    logger.info("[%s] game started, round 1/%d", self.game_id,
                len(self.catalog))
    return True

  def open_voting(self) -> bool:
    if not self.can_open_voting():
      self._rejected("open_voting")
      return False
    st = self.state
    st.phase = VOTING
    st.pending_votes = {}
    st.votes_processed = False
    st.voting_open = True
    st.tip_revealed_this_round = False
    # advisory only: voting stays open until the host reveals
    st.timer_end = int(self.clock() * 1000) + self.voting_window_seconds * 1000
    logger.info("[%s] voting open on round %d", self.game_id,
                st.current_round_index + 1)
    return True

  def accept_votes(self, player_id: str, bets: BetSet) -> bool:
    if not self.can_accept_votes(player_id):
      self._rejected("submit_votes")
      return False
    # full replace of any earlier submission this round
    self.state.pending_votes[player_id] = dict(bets)
    return True

  def reveal(self) -> Optional[List[RoundResult]]:
    """
    Close voting and settle every pending bet set once.

    Returns the per-player results, or None if the guard rejects the command.
    """
    if not self.can_reveal():
      self._rejected("reveal")
      return None
    st = self.state
    rnd = self.current_round()

    # price every bet set before touching any player
    settled = []
    for pid, bets in list(st.pending_votes.items()):
      if pid not in self.registry:
        continue
      try:
        settled.append((pid, compute_round_pnl(bets, rnd.movements)))
      except ValueError:
        logger.warning("[%s] dropping unsettleable bets from %s",
                       self.game_id, pid, exc_info=True)
        del st.pending_votes[pid]

    st.voting_open = False
    st.phase = REVEAL
    results = []
    for pid, pnl in settled:
      self.registry.apply_round_result(pid, pnl, rnd.id)
      results.append(
          RoundResult(pid, pnl,
                      capital_of(self.registry.get(pid),
                                 self.registry.starting_capital)))
    st.votes_processed = True
    logger.info("[%s] round %d revealed, %d bet sets settled", self.game_id,
                rnd.id, len(results))
    return results

  def next_round(self) -> Optional[str]:
    """Advance to the next round's news, or to END after the last round."""
    if not self.can_advance():
      self._rejected("next_round")
      return None
    st = self.state
    if st.current_round_index < len(self.catalog) - 1:
      st.current_round_index += 1
      st.phase = NEWS
      self._clear_round()
      logger.info("[%s] advanced to round %d", self.game_id,
                  st.current_round_index + 1)
    else:
      st.phase = END
      st.voting_open = False
      logger.info("[%s] game over", self.game_id)
    return st.phase

  def reset(self) -> None:
    self.state = SessionState()
    self.registry.clear()
    logger.info("[%s] reset to lobby", self.game_id)

  # ---------- Tips ----------
  def buy_tip(self, player_id: str) -> Optional[Tuple[str, float]]:
    """
    Sell the current round's tip to a player.

    Returns (tip, capital_after) or None on a guard rejection. Raises
    InsufficientFunds with the player left untouched.
    """
    if not self.can_buy_tip(player_id):
      self._rejected("buy_tip")
      return None
    pl = self.registry.get(player_id)
    capital = buy_tip(pl, self.tip_cost, self.registry.starting_capital)
    # TODO: product to decide whether this should gate re-purchase per player
    self.state.tip_revealed_this_round = True
    logger.info("[%s] %s bought the tip (%d so far)", self.game_id, pl.name,
                pl.tips_bought)
    return self.current_round().tip, capital

  # ---------- Internals ----------
  def _clear_round(self) -> None:
    st = self.state
    st.pending_votes = {}
    st.votes_processed = False
    st.voting_open = False
    st.timer_end = None
    st.tip_revealed_this_round = False
