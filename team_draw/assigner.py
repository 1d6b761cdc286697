"""Core team assignment logic for Team Draw."""

import logging
import math
import random
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd
import yaml

from .config import Config
from .models import Player

logger = logging.getLogger(__name__)

Team = List[Player]
Assignment = List[Team]


def assign(
    roster: Sequence[Player],
    previous: Optional[Sequence[Sequence[Player]]] = None,
    team_size: int = 4,
    max_repeat: int = 2,
    rng: Optional[random.Random] = None,
) -> Assignment:
    """Partition the roster into teams.

    Players are shuffled, one female is seeded per team, and the rest are
    dealt round-robin. When a previous assignment is given, teams that repeat
    more than ``max_repeat`` players from the same slot last round are
    rebalanced.

    Args:
        roster: Players to distribute; never mutated
        previous: Teams from the last round, if any
        team_size: Target team size; the team count is ceil(len(roster) / team_size)
        max_repeat: Largest tolerated overlap with the previous team at the same index
        rng: Random source, a fresh unseeded generator by default

    Returns:
        List of teams, each a list of players
    """
    rng = rng or random.Random()
    players = list(roster)
    if not players:
        return []

    team_count = math.ceil(len(players) / team_size)
    rng.shuffle(players)

    teams: Assignment = [[] for _ in range(team_count)]
    females = [p for p in players if p.gender == "F"]
    males = [p for p in players if p.gender == "M"]

    # Seed pass: at most one female per team
    for team in teams:
        if not females:
            break
        team.append(females.pop())

    # Fill pass: deal the rest round-robin from the tail of the pool
    pool = males + females
    index = 0
    while pool:
        teams[index % team_count].append(pool.pop())
        index += 1

    if previous:
        teams = rebalance(teams, previous, max_repeat)

    logger.debug("Assigned %d players to %d teams", len(players), team_count)
    return teams


def rebalance(
    teams: Sequence[Sequence[Player]],
    previous: Sequence[Sequence[Player]],
    max_repeat: int = 2,
) -> Assignment:
    """Break up teams that repeat too many players from the previous round.

    Single pass over team indices. For team ``i``, members shared with
    previous team ``i`` are swapped with the first players found scanning the
    other teams in order, skipping anyone who was on previous team ``i``.
    Swaps keep every player on exactly one team. Teams already visited are
    not checked again, so a later swap may leave an earlier team repeating.

    Returns:
        A new list of teams; the input is left untouched
    """
    arena: Assignment = [list(team) for team in teams]

    for i, team in enumerate(arena):
        prev_ids = {p.id for p in previous[i]} if i < len(previous) else set()
        intersection = [p for p in team if p.id in prev_ids]
        if len(intersection) <= max_repeat:
            continue

        candidates = [
            (j, slot)
            for j, other in enumerate(arena)
            if j != i
            for slot, p in enumerate(other)
            if p.id not in prev_ids
        ][:len(intersection)]

        for repeated, (j, slot) in zip(intersection, candidates):
            replacement = arena[j][slot]
            arena[i][arena[i].index(repeated)] = replacement
            arena[j][slot] = repeated

        logger.debug(
            "Team %d repeated %d players; swapped %d", i + 1, len(intersection), len(candidates)
        )

    return arena


def roster_summary(roster: Sequence[Player]) -> Dict[str, int]:
    """Composition counts for a roster."""
    females = sum(1 for p in roster if p.gender == "F")
    return {
        'total': len(roster),
        'male': len(roster) - females,
        'female': females,
    }


class TeamAssigner:
    """Assigns players to teams, remembering the last round."""

    def __init__(self, config: Optional[Config] = None, rng: Optional[random.Random] = None):
        """Initialize the team assigner.

        Args:
            config: Configuration object with team settings
            rng: Random source, mostly for reproducible tests
        """
        self.config = config or Config()
        self.rng = rng or random.Random()
        self.previous: Assignment = []

    def assign(self, roster: Sequence[Player]) -> Assignment:
        """Draw new teams and record them as the previous round."""
        teams = assign(
            roster,
            self.previous,
            team_size=self.config.team_size,
            max_repeat=self.config.max_repeat,
            rng=self.rng,
        )
        self.previous = [list(team) for team in teams]
        return teams

    def reset(self) -> None:
        """Forget the previous round."""
        self.previous = []

    def get_assignment_summary(self, teams: Sequence[Sequence[Player]]) -> Dict[str, Any]:
        """Get a summary of the assignment results.

        Args:
            teams: Team assignment to summarize

        Returns:
            Dictionary with assignment statistics
        """
        if not teams:
            return {
                'total_players': 0,
                'team_sizes': {},
                'females_per_team': {},
                'average_team_size': 0.0
            }

        team_sizes = {idx + 1: len(team) for idx, team in enumerate(teams)}
        females = {idx + 1: roster_summary(team)['female'] for idx, team in enumerate(teams)}
        average_size = sum(team_sizes.values()) / len(team_sizes)

        return {
            'total_players': sum(team_sizes.values()),
            'team_sizes': team_sizes,
            'females_per_team': females,
            'average_team_size': round(average_size, 2)
        }

    def save_assignments_csv(self, teams: Sequence[Sequence[Player]], output_path: Path) -> None:
        """Save assignments to CSV, one row per player.

        Args:
            teams: Team assignment to save
            output_path: Path where to save the assignments CSV
        """
        rows = [
            {'team': idx + 1, 'id': p.id, 'name': p.name, 'gender': p.gender}
            for idx, team in enumerate(teams)
            for p in team
        ]
        assignment_df = pd.DataFrame(rows, columns=['team', 'id', 'name', 'gender'])
        assignment_df.to_csv(output_path, index=False)

    def save_assignments_yaml(self, teams: Sequence[Sequence[Player]], output_path: Path) -> None:
        """Save assignments to YAML format with players grouped by team number.

        Args:
            teams: Team assignment to save
            output_path: Path where to save the assignments YAML
        """
        yaml_data = {'team': {}}
        for idx, team in enumerate(teams):
            yaml_data['team'][idx + 1] = [f"{p.name} ({p.gender})" for p in team]

        with open(output_path, 'w', encoding='utf-8') as f:
            yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=True, allow_unicode=True)
