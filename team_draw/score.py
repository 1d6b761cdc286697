"""Two-team running score."""

from typing import Any, Dict

TEAMS = ("A", "B")


class Scoreboard:
    """Score pair for team A and team B, never below zero."""

    def __init__(self, score_a: int = 0, score_b: int = 0):
        self.scores: Dict[str, int] = {"A": max(score_a, 0), "B": max(score_b, 0)}

    @property
    def score_a(self) -> int:
        return self.scores["A"]

    @property
    def score_b(self) -> int:
        return self.scores["B"]

    def _check(self, team: str) -> str:
        team = team.upper()
        if team not in TEAMS:
            raise ValueError(f"Team must be one of {', '.join(TEAMS)}, got {team!r}")
        return team

    def increment(self, team: str) -> int:
        team = self._check(team)
        self.scores[team] += 1
        return self.scores[team]

    def decrement(self, team: str) -> int:
        team = self._check(team)
        self.scores[team] = max(self.scores[team] - 1, 0)
        return self.scores[team]

    def reset(self) -> None:
        self.scores = {"A": 0, "B": 0}

    def to_dict(self) -> Dict[str, int]:
        return {"score_a": self.score_a, "score_b": self.score_b}

    @classmethod
    def from_dict(cls, data: Any) -> "Scoreboard":
        """Build a scoreboard from its stored mapping.

        Raises:
            ValueError: If the mapping is malformed
        """
        if not isinstance(data, dict):
            raise ValueError("Stored scores must be a mapping")
        values = []
        for key in ("score_a", "score_b"):
            value = data.get(key, 0)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(f"{key} must be a non-negative integer")
            values.append(value)
        return cls(*values)

    def __repr__(self) -> str:
        return f"Scoreboard(A={self.score_a}, B={self.score_b})"
