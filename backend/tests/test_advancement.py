"""Advancement resolver: winner of (round, index) feeds a fixed slot of the next round."""
import pytest

from tennis_brackets.errors import InvalidBracketPosition
from tennis_brackets.services.advancement_service import Advancement, Slot, resolve_advancement


def test_even_index_feeds_team1():
    assert resolve_advancement(1, 0, 11, rounds=2) == Advancement(
        next_round=2, next_match_index=0, slot=Slot.TEAM1, winner_id=11
    )


def test_odd_index_feeds_team2():
    assert resolve_advancement(1, 1, 12, rounds=2) == Advancement(
        next_round=2, next_match_index=0, slot=Slot.TEAM2, winner_id=12
    )


def test_next_index_is_half_of_current():
    # 16 teams: round 1 has indices 0..7
    for index in range(8):
        result = resolve_advancement(1, index, 99, rounds=4)
        assert result.next_round == 2
        assert result.next_match_index == index // 2
        assert result.slot == (Slot.TEAM1 if index % 2 == 0 else Slot.TEAM2)


def test_final_has_no_next_match():
    assert resolve_advancement(3, 0, 5, rounds=3) is None


def test_same_input_same_target():
    assert resolve_advancement(2, 3, 7, rounds=4) == resolve_advancement(2, 3, 7, rounds=4)


def test_slot_field_names():
    assert Slot.TEAM1.field == "team1_id"
    assert Slot.TEAM2.field == "team2_id"


@pytest.mark.parametrize(
    "round_number,match_index,rounds",
    [
        (0, 0, 3),  # rounds are 1-based
        (4, 0, 3),  # beyond the final
        (1, 4, 3),  # round 1 of 8 teams has indices 0..3
        (3, 1, 3),  # the final has one match
        (1, -1, 3),
    ],
)
def test_rejects_positions_outside_bracket(round_number, match_index, rounds):
    with pytest.raises(InvalidBracketPosition):
        resolve_advancement(round_number, match_index, 1, rounds)


def test_rejects_missing_winner():
    with pytest.raises(InvalidBracketPosition):
        resolve_advancement(1, 0, None, rounds=2)
