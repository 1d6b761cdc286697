"""Tests for the models module."""

import dataclasses

import pytest

from team_draw.models import (
    Player,
    create_player,
    next_player_id,
    players_from_list,
    teams_from_list,
    teams_to_list,
)


class TestPlayer:
    """Test cases for the Player model."""

    def test_create_player_normalizes_name(self):
        """Test that names are stripped and upper-cased."""
        player = create_player('  ana clara ', 'F', now_ms=1000)

        assert player == Player(id=1000, name='ANA CLARA', gender='F')
        assert player.is_female

    def test_create_player_rejects_blank_name(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            create_player('  ', 'M')

    def test_create_player_rejects_unknown_gender(self):
        with pytest.raises(ValueError, match="Gender"):
            create_player('BOB', 'X')

    def test_player_is_immutable(self):
        player = Player(id=1, name='BOB', gender='M')
        with pytest.raises(dataclasses.FrozenInstanceError):
            player.name = 'ROB'

    def test_ids_increase_past_existing(self):
        """Test that ids never collide, even within the same millisecond."""
        existing = [Player(id=5000, name='A', gender='M')]

        assert next_player_id(existing, now_ms=4000) == 5001
        assert next_player_id(existing, now_ms=6000) == 6000
        assert next_player_id([], now_ms=10) == 10

    def test_teams_to_list_and_back(self):
        teams = [[Player(id=1, name='ANA', gender='F')], [Player(id=2, name='BOB', gender='M')]]
        data = teams_to_list(teams)

        assert data[0] == [{'id': 1, 'name': 'ANA', 'gender': 'F'}]
        assert teams_from_list(data) == teams

    @pytest.mark.parametrize("data, error", [
        ({'id': 1}, ValueError),
        ([{'name': 'ANA', 'gender': 'F'}], KeyError),
        ([{'id': '1', 'name': 'ANA', 'gender': 'F'}], ValueError),
        ([{'id': 1, 'name': 'ANA', 'gender': 'W'}], ValueError),
    ])
    def test_malformed_roster(self, data, error):
        """Test that malformed stored rosters are rejected."""
        with pytest.raises(error):
            players_from_list(data)
