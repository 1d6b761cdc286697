"""Application state owner: roster, teams, score and their persistence."""

import json
import logging
import random
import sqlite3 as sql
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple

import pandas as pd

from . import db
from .assigner import Assignment, TeamAssigner, roster_summary
from .config import Config
from .models import Player, create_player, players_from_list, players_to_list, teams_from_list, teams_to_list
from .score import Scoreboard
from .validators import validate_draw_feasibility, validate_unique_ids

logger = logging.getLogger(__name__)


def _load_key(conn: sql.Connection, key: str, parse: Callable[[Any], Any], default: Callable[[], Any]) -> Any:
    """Load and parse one stored value, falling back to the default on any failure."""
    try:
        raw = db.fetch_state(conn, key)
        if raw is None:
            return default()
        return parse(json.loads(raw))
    except (sql.Error, ValueError, KeyError, TypeError) as e:
        logger.warning("Failed to load %s from storage, using default: %s", key, e)
        return default()


def _parse_roster(data: Any) -> List[Player]:
    players = players_from_list(data)
    validate_unique_ids(p.id for p in players)
    return players


def read_roster_csv(csv_path: Path) -> List[Tuple[str, str]]:
    """Read (name, gender) pairs from a CSV with ``name`` and ``gender`` columns.

    Raises:
        FileNotFoundError: If the CSV file doesn't exist
        ValueError: If the CSV is empty or lacks the required columns
    """
    if not csv_path.exists():
        raise FileNotFoundError(f"Roster file not found: {csv_path}")

    try:
        df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        raise ValueError("Roster CSV file is empty")

    df.columns = [str(column).strip().lower() for column in df.columns]
    missing = {'name', 'gender'} - set(df.columns)
    if missing:
        raise ValueError(f"Roster CSV is missing columns: {sorted(missing)}")

    return [
        (row['name'], row['gender'].strip().upper())
        for row in df[['name', 'gender']].to_dict('records')
    ]


class Session:
    """Owns the roster, the current teams and the score.

    The current teams double as the previous round for the next draw. Every
    state change is written to storage; storage failures are logged and
    otherwise ignored.
    """

    def __init__(
        self,
        conn: sql.Connection,
        config: Optional[Config] = None,
        rng: Optional[random.Random] = None,
    ):
        self.conn = conn
        self.config = config or Config()
        self.assigner = TeamAssigner(self.config, rng)
        self.players: List[Player] = []
        self.teams: Assignment = []
        self.scoreboard = Scoreboard()

    @classmethod
    def load(cls, conn: sql.Connection, config: Optional[Config] = None, rng: Optional[random.Random] = None) -> "Session":
        """Restore a session from storage."""
        session = cls(conn, config, rng)
        try:
            db.ensure_state(conn)
        except sql.Error as e:
            logger.warning("Failed to prepare storage: %s", e)

        session.players = _load_key(conn, db.PLAYERS_KEY, _parse_roster, list)
        session.teams = _load_key(conn, db.TEAMS_KEY, teams_from_list, list)
        session.scoreboard = _load_key(conn, db.SCORES_KEY, Scoreboard.from_dict, Scoreboard)
        session._prune_teams()
        session.assigner.previous = [list(team) for team in session.teams]
        return session

    def _save(self, key: str, value: Any) -> None:
        try:
            db.insert_state(self.conn, key, json.dumps(value, ensure_ascii=False))
        except sql.Error as e:
            logger.warning("Failed to save %s to storage: %s", key, e)

    def _save_players(self) -> None:
        self._save(db.PLAYERS_KEY, players_to_list(self.players))

    def _save_teams(self) -> None:
        self._save(db.TEAMS_KEY, teams_to_list(self.teams))

    def _save_scores(self) -> None:
        self._save(db.SCORES_KEY, self.scoreboard.to_dict())

    def _prune_teams(self) -> bool:
        """Drop players no longer on the roster from the teams; drop emptied teams."""
        ids = {p.id for p in self.players}
        pruned = [[p for p in team if p.id in ids] for team in self.teams]
        pruned = [team for team in pruned if team]
        changed = pruned != self.teams
        self.teams = pruned
        return changed

    # Roster

    def summary(self) -> dict:
        return roster_summary(self.players)

    def add_player(self, name: str, gender: str) -> Player:
        """Register a player.

        Raises:
            ValueError: If the name is blank or the gender unknown
        """
        player = create_player(name, gender, self.players)
        self.players.append(player)
        self._save_players()
        logger.info("Added player %s (%s)", player.name, player.gender)
        return player

    def import_players(self, csv_path: Path) -> Tuple[List[Player], List[str]]:
        """Register every valid row of a roster CSV.

        Returns:
            The players added and a message for each skipped row
        """
        added: List[Player] = []
        skipped: List[str] = []
        for line, (name, gender) in enumerate(read_roster_csv(csv_path), start=2):
            try:
                player = create_player(name, gender, self.players)
            except ValueError as e:
                skipped.append(f"line {line}: {e}")
                continue
            self.players.append(player)
            added.append(player)

        if added:
            self._save_players()
        return added, skipped

    def remove_player(self, player_id: int) -> Player:
        """Remove a player from the roster and from the current teams.

        Raises:
            ValueError: If no player has that id
        """
        for idx, player in enumerate(self.players):
            if player.id == player_id:
                break
        else:
            raise ValueError(f"No player with id {player_id}")

        del self.players[idx]
        self._save_players()
        if self._prune_teams():
            self.assigner.previous = [list(team) for team in self.teams]
            self._save_teams()
        logger.info("Removed player %s", player.name)
        return player

    def reset(self) -> None:
        """Clear the roster, the teams and the draw history."""
        self.players = []
        self.teams = []
        self.assigner.reset()
        self._save_players()
        self._save_teams()

    # Teams

    def can_draw(self) -> bool:
        return len(self.players) >= self.config.min_players

    def draw_teams(self) -> Assignment:
        """Draw new teams from the roster.

        Raises:
            ValueError: If the roster is too small for a draw
        """
        validate_draw_feasibility(len(self.players), self.config.team_size, self.config.min_teams)
        self.teams = self.assigner.assign(self.players)
        self._save_teams()
        logger.info("Drew %d teams from %d players", len(self.teams), len(self.players))
        return self.teams

    # Score

    def score_up(self, team: str) -> int:
        score = self.scoreboard.increment(team)
        self._save_scores()
        return score

    def score_down(self, team: str) -> int:
        score = self.scoreboard.decrement(team)
        self._save_scores()
        return score

    def reset_score(self) -> None:
        self.scoreboard.reset()
        self._save_scores()
