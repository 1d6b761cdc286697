"""Player model and (de)serialization helpers."""

import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Optional

from .validators import validate_gender, validate_player_name


@dataclass(frozen=True)
class Player:
    """A registered player. Immutable once created."""
    id: int
    name: str
    gender: str

    def __post_init__(self):
        validate_gender(self.gender)

    @property
    def is_female(self) -> bool:
        return self.gender == "F"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Build a player from its stored mapping.

        Raises:
            KeyError: If a field is missing
            ValueError: If the id is not an integer or the gender is unknown
        """
        player_id = data["id"]
        if not isinstance(player_id, int) or isinstance(player_id, bool):
            raise ValueError(f"Player id must be an integer, got {player_id!r}")
        return cls(id=player_id, name=str(data["name"]), gender=data["gender"])


def next_player_id(existing: Iterable[Player], now_ms: Optional[int] = None) -> int:
    """Creation-time id, bumped past the largest existing id on collision."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    highest = max((player.id for player in existing), default=0)
    return max(now_ms, highest + 1)


def create_player(name: str, gender: str, existing: Iterable[Player] = (), now_ms: Optional[int] = None) -> Player:
    """Create a new player, normalizing the name to uppercase.

    Raises:
        ValueError: If the name is blank or the gender unknown
    """
    validate_player_name(name)
    validate_gender(gender)
    return Player(id=next_player_id(existing, now_ms), name=name.strip().upper(), gender=gender)


def players_to_list(players: Iterable[Player]) -> List[Dict[str, Any]]:
    return [player.to_dict() for player in players]


def players_from_list(data: Any) -> List[Player]:
    if not isinstance(data, list):
        raise ValueError("Stored roster must be a list")
    return [Player.from_dict(item) for item in data]


def teams_to_list(teams: Iterable[Iterable[Player]]) -> List[List[Dict[str, Any]]]:
    return [players_to_list(team) for team in teams]


def teams_from_list(data: Any) -> List[List[Player]]:
    if not isinstance(data, list):
        raise ValueError("Stored teams must be a list")
    return [players_from_list(team) for team in data]
