"""Shareable plain-text rendering of a team assignment."""

import random
from typing import Dict, List, Optional, Sequence

from .config import Config
from .models import Player

GENDER_MARKERS = {"M": "♂️", "F": "♀️"}


def random_color(rng: Optional[random.Random] = None) -> str:
    rng = rng or random.Random()
    return "#" + "".join(rng.choice("0123456789ABCDEF") for _ in range(6))


def team_color(index: int, palette: List[Dict[str, str]], rng: Optional[random.Random] = None) -> Dict[str, str]:
    """Palette entry for a team index.

    Indices past the end of the palette get a generated colour and no emoji.
    """
    if 0 <= index < len(palette):
        return palette[index]
    color = random_color(rng)
    return {'name': color, 'color': color, 'emoji': ''}


def format_teams_text(teams: Sequence[Sequence[Player]], config: Optional[Config] = None) -> str:
    """Render teams as a message ready to paste into a chat.

    Args:
        teams: Team assignment to render
        config: Supplies header, signature and palette

    Returns:
        The transcript; always ends with the signature line
    """
    config = config or Config()
    lines = [config.header, ""]

    for idx, team in enumerate(teams):
        emoji = config.palette[idx]['emoji'] if idx < len(config.palette) else ""
        lines.append(f"{emoji} *Time {idx + 1}:*")
        for player in team:
            lines.append(f"- {player.name} {GENDER_MARKERS[player.gender]}")
        lines.append("")

    lines.extend(["", "", config.signature])
    return "\n".join(lines)
