from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from domain.models import Round

MARKETS = ("Bond", "Equity", "Forex (USD)", "Property")

DEFAULT_ROUNDS = (
    Round(
        id=1,
        title="Round 1: The Fed Speaks",
        news=("The Federal Reserve has signalled it may pause rate hikes amid "
              "mixed inflation data. Manufacturing PMI came in below "
              "expectations at 48.2, while the jobs report showed 250,000 new "
              "jobs added last month."),
        markets=MARKETS,
        movements={"Bond": 4.2, "Equity": 2.8, "Forex (USD)": -1.5,
                   "Property": 1.1},
        analysis=("Pausing rate hikes -> bonds rally (yields fall, prices up). "
                  "Equities cheer easier money. USD weakens on dovish Fed. "
                  "Property slightly positive as mortgage rates ease."),
        tip="A dovish pause is usually good news for duration. Watch bonds.",
    ),
    Round(
        id=2,
        title="Round 2: China Slowdown",
        news=("China's GDP growth slows to 4.2%, missing the 5% target. Export "
              "data drops 8% YoY. Beijing hints at stimulus but no concrete "
              "measures announced yet."),
        markets=MARKETS,
        movements={"Bond": 2.1, "Equity": -3.5, "Forex (USD)": 2.8,
                   "Property": -2.2},
        analysis=("Risk-off: investors flee to safe-haven bonds. Equities fall "
                  "on growth fears. USD strengthens as safe haven. Property "
                  "weakens on sentiment and tighter credit."),
        tip="Think risk-off: where does money hide when growth wobbles?",
    ),
    Round(
        id=3,
        title="Round 3: Oil Shock",
        news=("OPEC+ announces surprise production cuts of 1.5 million "
              "barrels/day. Brent crude surges 8% in a single session. Energy "
              "CPI expected to spike next month."),
        markets=MARKETS,
        movements={"Bond": -3.8, "Equity": -1.2, "Forex (USD)": 1.9,
                   "Property": -0.8},
        analysis=("Inflation fears -> bonds sell off (yields spike). Equities "
                  "mixed but net negative on cost pressures. USD strengthens on "
                  "petrodollar flows. Property squeezed by rate expectations."),
        tip="Higher energy prices feed inflation, and inflation hurts bonds.",
    ),
    Round(
        id=4,
        title="Round 4: Tech Boom",
        news=("A major AI breakthrough is announced by a leading tech firm. "
              "Nasdaq futures up 4% pre-market. Venture capital inflows hit a "
              "3-year high. Consumer confidence index jumps to 112."),
        markets=MARKETS,
        movements={"Bond": -1.5, "Equity": 6.2, "Forex (USD)": 0.8,
                   "Property": 2.5},
        analysis=("Risk-on: equities surge led by tech. Bonds slightly sold as "
                  "money rotates to equities. USD marginally up on US growth "
                  "story. Property benefits from improved consumer sentiment."),
        tip="Risk-on days reward the growth trade. Equities lead.",
    ),
)


class RoundCatalog:
  """
  Ordered, read-only sequence of rounds.

  Raises ValueError at construction if a round lists a market that has no
  authored movement.
  """

  def __init__(self, rounds: Iterable[Round] = DEFAULT_ROUNDS):
    self._rounds: List[Round] = list(rounds)
    for r in self._rounds:
      missing = [m for m in r.markets if m not in r.movements]
      if missing:
        raise ValueError(f"round {r.id} has no movement for {missing}")

  def __len__(self) -> int:
    return len(self._rounds)

  def __iter__(self) -> Iterator[Round]:
    return iter(self._rounds)

  def get(self, index: int) -> Optional[Round]:
    if 0 <= index < len(self._rounds):
      return self._rounds[index]
    return None
