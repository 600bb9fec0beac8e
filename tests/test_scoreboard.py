from __future__ import annotations

import pytest

from flip7 import scoreboard
from flip7.state import Player, PlayerView, TurnStatus


def _record(turn: int, player_index: int, status: TurnStatus, awarded: int) -> scoreboard.TurnRecord:
    return scoreboard.TurnRecord(
        turn_number=turn,
        player_index=player_index,
        status=status,
        awarded=awarded,
        card_count=3,
    )


def test_match_history_accumulates_totals() -> None:
    history = scoreboard.MatchHistory(num_players=2)
    history.record(_record(1, 0, TurnStatus.MANUALLY_ENDED, 18))
    history.record(_record(2, 1, TurnStatus.BUSTED, 0))
    history.record(_record(3, 0, TurnStatus.HAND_LIMIT_REACHED, 55))
    history.record(_record(4, 1, TurnStatus.FROZEN, 7))

    totals = history.totals()
    assert len(history.turns) == 4
    assert totals[0].turns == 2
    assert totals[0].points == 73
    assert totals[0].best_turn == 55
    assert totals[0].bonuses == 1
    assert totals[0].busts == 0
    assert totals[1].busts == 1
    assert totals[1].points == 7


def test_match_history_validates_records() -> None:
    history = scoreboard.MatchHistory(num_players=2)

    with pytest.raises(ValueError):
        history.record(_record(1, 2, TurnStatus.MANUALLY_ENDED, 4))
    with pytest.raises(ValueError):
        history.record(_record(1, 0, TurnStatus.MANUALLY_ENDED, -1))
    with pytest.raises(ValueError):
        scoreboard.MatchHistory(num_players=0)


def test_leaderboard_is_stable_for_ties() -> None:
    players = [Player("A", 10), Player("B", 30), Player("C", 10)]

    ranked = scoreboard.leaderboard(players)

    assert [player.name for _, player in ranked] == ["B", "A", "C"]
    assert [idx for idx, _ in ranked] == [1, 0, 2]


def test_leaderboard_ranks_snapshot_views() -> None:
    views = (
        PlayerView(index=0, name="A", total_score=5),
        PlayerView(index=1, name="B", total_score=40),
        PlayerView(index=2, name="C", total_score=40),
    )

    ranked = scoreboard.leaderboard(views)

    assert [view.name for _, view in ranked] == ["B", "C", "A"]
