from __future__ import annotations

from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.models import Bet, BetSet

NAME_MAX = 40
MAX_AMOUNT = 1_000_000_000
MAX_MULTIPLIER = 1_000


class JoinIn(BaseModel):
    name: str = ""

    @field_validator("name")
    @classmethod
    def _clip_name(cls, v: str) -> str:
        return v.strip()[:NAME_MAX]


class BetIn(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    direction: Literal["long", "short", "skip"]
    amount: float = Field(0.0, ge=0, le=MAX_AMOUNT)
    multiplier: float = Field(1.0, ge=1, le=MAX_MULTIPLIER)

    def to_bet(self) -> Bet:
        return Bet(self.direction, self.amount, self.multiplier)


class SubmitVotesIn(BaseModel):
    votes: Dict[str, BetIn]

    def to_bet_set(self) -> BetSet:
        return {market: b.to_bet() for market, b in self.votes.items()}


class HostJoinIn(BaseModel):
    token: Optional[str] = None
