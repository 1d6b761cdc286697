"""Validation utilities for Team Draw."""

from typing import Iterable


GENDERS = ("M", "F")
MAX_NAME_LENGTH = 100


def validate_player_name(name: str) -> None:
    """Validate a player name before registration.

    Args:
        name: Display name as typed by the user

    Raises:
        ValueError: If the name is empty, whitespace-only or too long
    """
    if not name or not name.strip():
        raise ValueError("Player names cannot be empty or whitespace-only")

    if len(name.strip()) > MAX_NAME_LENGTH:
        raise ValueError(f"Player name too long (max {MAX_NAME_LENGTH} chars): '{name[:50]}...'")


def validate_gender(gender: str) -> None:
    """Validate a gender tag.

    Raises:
        ValueError: If the tag is not one of M or F
    """
    if gender not in GENDERS:
        raise ValueError(f"Gender must be one of {', '.join(GENDERS)}, got {gender!r}")


def validate_unique_ids(ids: Iterable[int]) -> None:
    """Validate that player ids in a roster are unique.

    Raises:
        ValueError: If an id is repeated
    """
    seen = set()
    duplicates = set()
    for player_id in ids:
        if player_id in seen:
            duplicates.add(player_id)
        seen.add(player_id)

    if duplicates:
        raise ValueError(f"Roster contains duplicate player ids: {sorted(duplicates)}")


def validate_draw_feasibility(num_players: int, team_size: int, min_teams: int) -> None:
    """Validate that a team draw should be offered for the roster size.

    The assignment itself copes with any roster; this gate only mirrors when
    the draw action is made available to the user.

    Args:
        num_players: Total number of registered players
        team_size: Target team size
        min_teams: Minimum number of full teams a draw must produce

    Raises:
        ValueError: If there are not enough players
    """
    required = team_size * min_teams
    if num_players < required:
        raise ValueError(
            f"Cannot draw teams: {num_players} players, "
            f"need at least {required} ({min_teams} teams of {team_size})"
        )
