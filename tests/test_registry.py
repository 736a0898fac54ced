from domain.registry import PlayerRegistry


def test_join_creates_player_with_zero_pnl(registry):
    pl = registry.join("p1", "Ann")
    assert pl.cumulative_pnl == 0
    assert pl.history == []
    assert pl.tips_bought == 0
    assert "p1" in registry
    assert len(registry) == 1


def test_rejoin_keeps_record_and_name(registry):
    registry.join("p1", "Ann")
    registry.apply_round_result("p1", 12.5, 1)
    again = registry.join("p1", "Someone Else")
    assert again.name == "Ann"
    assert again.cumulative_pnl == 12.5
    assert again.history == [{"roundId": 1, "pnl": 12.5}]
    assert len(registry) == 1


def test_leaderboard_sorted_by_capital_with_stable_ties(registry):
    registry.join("a", "Ann")
    registry.join("b", "Bob")
    registry.join("c", "Cat")
    registry.apply_round_result("b", 50, 1)
    assert registry.leaderboard() == [
        {"name": "Bob", "pnl": 50, "capital": 10050},
        {"name": "Ann", "pnl": 0, "capital": 10000},
        {"name": "Cat", "pnl": 0, "capital": 10000},
    ]


def test_idle_player_keeps_starting_capital():
    reg = PlayerRegistry(starting_capital=10000)
    reg.join("p1", "Ann")
    assert reg.leaderboard()[0]["capital"] == 10000


def test_clear_empties_registry(registry):
    registry.join("p1", "Ann")
    registry.clear()
    assert len(registry) == 0
    assert registry.get("p1") is None
