import pytest

from domain.catalog import RoundCatalog
from domain.models import Round
from domain.registry import PlayerRegistry
from domain.session import GameSession

MARKETS = ("Bond", "Equity")


def make_round(rid, bond=4.2, equity=-3.5, tip="Buy bonds."):
    return Round(
        id=rid,
        title=f"Round {rid}",
        news=f"News {rid}",
        markets=MARKETS,
        movements={"Bond": bond, "Equity": equity},
        analysis=f"Analysis {rid}",
        tip=tip,
    )


@pytest.fixture
def catalog():
    return RoundCatalog([make_round(1), make_round(2, bond=-1.0, equity=2.0, tip=None)])


@pytest.fixture
def registry():
    return PlayerRegistry(starting_capital=10000)


@pytest.fixture
def session(catalog, registry):
    return GameSession(catalog, registry, voting_window_seconds=60,
                       tip_cost=500, clock=lambda: 1000.0)
