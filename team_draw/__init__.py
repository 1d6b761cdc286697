"""Team Draw - A tool to draw balanced teams and keep score for casual games."""

__version__ = "0.1.0"

from .assigner import TeamAssigner, assign
from .config import Config
from .export import format_teams_text
from .models import Player
from .score import Scoreboard
from .session import Session

__all__ = ["TeamAssigner", "assign", "Config", "format_teams_text", "Player", "Scoreboard", "Session"]
