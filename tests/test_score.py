"""Tests for the score module."""

import pytest

from team_draw.score import Scoreboard


class TestScoreboard:
    """Test cases for the Scoreboard class."""

    def test_increment_and_decrement(self):
        board = Scoreboard()
        board.increment('A')
        board.increment('A')
        board.increment('b')
        board.decrement('A')

        assert (board.score_a, board.score_b) == (1, 1)

    def test_floor_of_zero(self):
        """Test that scores never go negative."""
        board = Scoreboard()
        assert board.decrement('B') == 0
        assert board.score_b == 0

    def test_reset(self):
        board = Scoreboard(3, 4)
        board.reset()
        assert board.to_dict() == {'score_a': 0, 'score_b': 0}

    def test_unknown_team(self):
        with pytest.raises(ValueError, match="Team must be one of"):
            Scoreboard().increment('C')

    def test_from_dict(self):
        board = Scoreboard.from_dict({'score_a': 2, 'score_b': 5})
        assert (board.score_a, board.score_b) == (2, 5)

    @pytest.mark.parametrize("data", [[1, 2], {'score_a': -1}, {'score_b': 'x'}])
    def test_from_dict_malformed(self, data):
        with pytest.raises(ValueError):
            Scoreboard.from_dict(data)
