"""
Payload builders: the public `state` snapshot and the point-to-point
notifications. Everything returned here is a JSON-ready dict with a `type`.

The snapshot is the only place round answers leave the server, and they are
only computed in the reveal phase.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from domain.economy import compute_vote_tally
from domain.models import REVEAL, PlayerState
from domain.session import GameSession, RoundResult


def round_view(session: GameSession) -> Optional[Dict]:
  rnd = session.current_round()
  if rnd is None:
    return None
  view = {
      "id": rnd.id,
      "title": rnd.title,
      "news": rnd.news,
      "markets": list(rnd.markets),
      "analysis": None,
      "movements": None,
      "voteTally": None,
      "tip": None,
  }
  if session.phase == REVEAL:
    view.update({
        "analysis": rnd.analysis,
        "movements": dict(rnd.movements),
        "voteTally": compute_vote_tally(
            session.state.pending_votes.values(), rnd.markets),
        "tip": rnd.tip,
    })
  return view


def public_snapshot(session: GameSession) -> Dict:
  st = session.state
  return {
      "type": "state",
      "phase": st.phase,
      "currentRound": st.current_round_index,
      "totalRounds": len(session.catalog),
      "round": round_view(session),
      "votingOpen": st.voting_open,
      "timerEnd": st.timer_end,
      "playerCount": len(session.registry),
      "leaderboard": session.registry.leaderboard(),
      "tipRevealed": st.tip_revealed_this_round,
  }


def leaderboard_payload(session: GameSession) -> Dict:
  return {"type": "leaderboard", "rows": session.registry.leaderboard()}


# ---------- Personal notifications ----------
def joined_payload(pl: PlayerState, capital: float,
                   starting_capital: float) -> Dict:
  return {
      "type": "joined",
      "id": pl.player_id,
      "capital": capital,
      "startingCapital": starting_capital,
  }


def votes_received_payload() -> Dict:
  return {"type": "votesReceived"}


def tip_revealed_payload(tip: str, cost: float) -> Dict:
  return {"type": "tipRevealed", "tip": tip, "cost": cost}


def tip_error_payload(message: str) -> Dict:
  return {"type": "tipError", "message": message}


def capital_update_payload(capital: float) -> Dict:
  return {"type": "capitalUpdate", "capital": capital}


def round_result_payload(res: RoundResult) -> Dict:
  return {"type": "roundResult", "pnl": res.pnl, "totalCapital": res.total_capital}


def final_result_payload(total_capital: float, board: List[Dict]) -> Dict:
  return {"type": "finalResult", "totalCapital": total_capital, "leaderboard": board}


def host_joined_payload() -> Dict:
  return {"type": "hostJoined"}


def vote_count_payload(n: int) -> Dict:
  return {"type": "voteCount", "n": n}
