# domain/economy.py
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, Mapping

from domain.models import DIRECTION_SIGN, DIRECTIONS, Bet, PlayerState

_CENTS = Decimal("0.01")


class InsufficientFunds(Exception):

    def __init__(self, capital: float, cost: float):
        super().__init__(f"insufficient capital: {capital:.2f} < {cost:.2f}")
        self.capital = capital
        self.cost = cost


def round_money(x: float) -> float:
    """Round to cents, half away from zero (Decimal ROUND_HALF_UP is symmetric)."""
    return float(Decimal(repr(x)).quantize(_CENTS, rounding=ROUND_HALF_UP)) or 0.0


def capital_of(pl: PlayerState, starting_capital: float) -> float:
    return round_money(starting_capital + pl.cumulative_pnl)


def compute_round_pnl(bets: Mapping[str, Bet],
                      movements: Mapping[str, float]) -> float:
    """
    P&L of one bet set against a round's authored movements.

    Each market contributes sign(direction) * amount * multiplier * move / 100.
    Markets without an authored movement move 0. Only the final sum is rounded.
    """
    pnl = 0.0
    for market, bet in bets.items():
        move = movements.get(market, 0.0)
        sign = DIRECTION_SIGN.get(bet.direction, 0)
        pnl += bet.amount * bet.multiplier * sign * move / 100
    if not math.isfinite(pnl):
        raise ValueError(f"non-finite P&L for bets on {sorted(bets)}")
    return round_money(pnl)


def compute_vote_tally(
    bet_sets: Iterable[Mapping[str, Bet]], markets: Iterable[str]
) -> Dict[str, Dict[str, int]]:
    """
    Count long/short/skip choices per round market across all bet sets.
    Bets on markets outside the round are ignored.
    """
    tally = {m: {d: 0 for d in DIRECTIONS} for m in markets}
    for bets in bet_sets:
        for market, bet in bets.items():
            counts = tally.get(market)
            if counts is not None and bet.direction in counts:
                counts[bet.direction] += 1
    return tally


def buy_tip(pl: PlayerState, tip_cost: float, starting_capital: float) -> float:
    """
    Debit `tip_cost` from the player's P&L and count the purchase.

    Raises InsufficientFunds, leaving the player untouched, when capital is
    below the cost. Returns the capital after the purchase.
    """
    capital = starting_capital + pl.cumulative_pnl
    if capital < tip_cost:
        raise InsufficientFunds(round_money(capital), tip_cost)
    pl.cumulative_pnl -= tip_cost
    pl.tips_bought += 1
    return capital_of(pl, starting_capital)
