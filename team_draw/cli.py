"""Command line interface for Team Draw."""

import logging
import sqlite3 as sql
import sys
from pathlib import Path
from typing import Optional

import click
import yaml

import team_draw.db as db
from team_draw.assigner import TeamAssigner
from team_draw.config import Config
from team_draw.export import format_teams_text, team_color
from team_draw.session import Session


GENDER_COLORS = {"M": "blue", "F": "magenta"}

def hex_to_rgb(color: str) -> tuple[int, int, int]:
  """Convert a #RRGGBB colour to an RGB tuple click can style with."""
  color = color.lstrip("#")
  return tuple(int(color[i:i + 2], 16) for i in (0, 2, 4))

def fail(message: str) -> None:
  click.secho(f"Error: {message}", fg="red")
  sys.exit(1)

def open_session(ctx: click.Context, db_file: Path) -> tuple[sql.Connection, Session]:
  conn = sql.connect(db_file)
  ctx.call_on_close(conn.close)
  return conn, Session.load(conn, ctx.obj["config"])

def echo_teams(session: Session) -> None:
  for idx, team in enumerate(session.teams):
    color = team_color(idx, session.config.palette)
    click.secho(f"{color['emoji']} Time {idx + 1}".strip(), fg=hex_to_rgb(color["color"]), bold=True)
    for player in team:
      click.secho(f"  - {player.name}", fg=GENDER_COLORS[player.gender])

@click.group()
@click.option("--config", "config_file", type=click.Path(path_type=Path), default=None,
              help="YAML configuration file")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_file: Optional[Path], verbose: bool):
  """Team Draw CLI for registering players, drawing teams and keeping score."""
  logging.basicConfig(
    level=logging.DEBUG if verbose else logging.WARNING,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
  )
  config = Config()
  if config_file is not None:
    try:
      config.load_from_file(config_file)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
      fail(str(e))
  ctx.obj = {"config": config}

@cli.command()
@click.argument("db_file", type=click.Path(path_type=Path))
def init(db_file: Path):
  """Initialize the database."""
  if db_file.exists():
    db_file.unlink()

  with sql.connect(db_file) as conn:
    db.truncate_state(conn)
  click.secho(f"Initialized database {db_file}", fg="green")

@cli.command()
@click.argument("db_file", type=click.Path(path_type=Path))
@click.argument("name")
@click.option("--gender", "-g", type=click.Choice(["M", "F"], case_sensitive=False), default="M",
              show_default=True, help="Player gender")
@click.pass_context
def add(ctx: click.Context, db_file: Path, name: str, gender: str):
  """Register a player."""
  _, session = open_session(ctx, db_file)
  try:
    player = session.add_player(name, gender.upper())
  except ValueError as e:
    fail(str(e))
  click.secho(f"Added {player.name} ({player.gender}) with id {player.id}", fg="green")

@cli.command("import")
@click.argument("db_file", type=click.Path(path_type=Path))
@click.argument("csv_file", type=click.Path(exists=True, path_type=Path))
@click.pass_context
def import_players(ctx: click.Context, db_file: Path, csv_file: Path):
  """Register players from a CSV with name and gender columns."""
  _, session = open_session(ctx, db_file)
  try:
    added, skipped = session.import_players(csv_file)
  except ValueError as e:
    fail(str(e))

  for message in skipped:
    click.secho(f"Skipping {message}", fg="yellow")
  click.secho(f"Imported {len(added)} players from {csv_file}", fg="green")

@cli.command()
@click.argument("db_file", type=click.Path(exists=True, path_type=Path))
@click.argument("player_id", type=int)
@click.pass_context
def remove(ctx: click.Context, db_file: Path, player_id: int):
  """Remove a player by id."""
  _, session = open_session(ctx, db_file)
  try:
    player = session.remove_player(player_id)
  except ValueError as e:
    fail(str(e))
  click.secho(f"Removed {player.name}", fg="yellow")

@cli.command()
@click.argument("db_file", type=click.Path(exists=True, path_type=Path))
@click.pass_context
def players(ctx: click.Context, db_file: Path):
  """List registered players."""
  _, session = open_session(ctx, db_file)
  for player in session.players:
    click.secho(f"{player.id}  {player.name}", fg=GENDER_COLORS[player.gender])

  summary = session.summary()
  click.secho(
    f"Total: {summary['total']} | Men: {summary['male']} | Women: {summary['female']}",
    fg="blue",
  )

@cli.command()
@click.argument("db_file", type=click.Path(exists=True, path_type=Path))
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def reset(ctx: click.Context, db_file: Path, yes: bool):
  """Clear the players and the drawn teams."""
  _, session = open_session(ctx, db_file)
  if not yes and not click.confirm("Reset the player list and drawn teams?", default=False):
    click.secho("Reset cancelled", fg="yellow")
    return
  session.reset()
  click.secho("Player list reset", fg="green")

@cli.command()
@click.argument("db_file", type=click.Path(exists=True, path_type=Path))
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def draw(ctx: click.Context, db_file: Path, yes: bool):
  """Draw teams from the registered players."""
  _, session = open_session(ctx, db_file)
  if not session.can_draw():
    fail(f"Need at least {session.config.min_players} players to draw teams, have {len(session.players)}")

  if not yes and not click.confirm(f"Draw teams for {len(session.players)} players?", default=True):
    click.secho("Draw cancelled", fg="yellow")
    return

  session.draw_teams()
  echo_teams(session)
  summary = TeamAssigner(session.config).get_assignment_summary(session.teams)
  click.secho(f"Team sizes: {summary['team_sizes']}", fg="blue")

@cli.command()
@click.argument("db_file", type=click.Path(exists=True, path_type=Path))
@click.pass_context
def teams(ctx: click.Context, db_file: Path):
  """Show the drawn teams."""
  _, session = open_session(ctx, db_file)
  if not session.teams:
    click.secho("No teams drawn yet", fg="yellow")
    return
  echo_teams(session)

@cli.command()
@click.argument("db_file", type=click.Path(exists=True, path_type=Path))
@click.option("--format", "fmt", type=click.Choice(["text", "csv", "yaml"]), default="text", show_default=True)
@click.option("--output", type=click.Path(path_type=Path), default=None,
              help="Output file (required for csv and yaml)")
@click.pass_context
def export(ctx: click.Context, db_file: Path, fmt: str, output: Optional[Path]):
  """Export the drawn teams as shareable text, CSV or YAML."""
  _, session = open_session(ctx, db_file)
  if not session.teams:
    fail("No teams drawn yet")

  assigner = TeamAssigner(session.config)
  if fmt == "text":
    text = format_teams_text(session.teams, session.config)
    if output is None:
      click.echo(text)
    else:
      output.write_text(text + "\n", encoding="utf-8")
  elif output is None:
    fail(f"--output is required for {fmt} export")
  elif fmt == "csv":
    assigner.save_assignments_csv(session.teams, output)
  else:
    assigner.save_assignments_yaml(session.teams, output)

  if output is not None:
    click.secho(f"Exported teams to {output}", fg="green")

@cli.group()
def score():
  """Keep the running score of team A and team B."""
  pass

def echo_score(session: Session) -> None:
  click.secho(f"Time A {session.scoreboard.score_a} x {session.scoreboard.score_b} Time B", fg="blue", bold=True)

@score.command("show")
@click.argument("db_file", type=click.Path(exists=True, path_type=Path))
@click.pass_context
def score_show(ctx: click.Context, db_file: Path):
  """Show the score."""
  _, session = open_session(ctx, db_file)
  echo_score(session)

@score.command("up")
@click.argument("db_file", type=click.Path(exists=True, path_type=Path))
@click.argument("team", type=click.Choice(["A", "B"], case_sensitive=False))
@click.pass_context
def score_up(ctx: click.Context, db_file: Path, team: str):
  """Add a point to a team."""
  _, session = open_session(ctx, db_file)
  session.score_up(team)
  echo_score(session)

@score.command("down")
@click.argument("db_file", type=click.Path(exists=True, path_type=Path))
@click.argument("team", type=click.Choice(["A", "B"], case_sensitive=False))
@click.pass_context
def score_down(ctx: click.Context, db_file: Path, team: str):
  """Take a point from a team, never below zero."""
  _, session = open_session(ctx, db_file)
  session.score_down(team)
  echo_score(session)

@score.command("reset")
@click.argument("db_file", type=click.Path(exists=True, path_type=Path))
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def score_reset(ctx: click.Context, db_file: Path, yes: bool):
  """Reset the score to 0 x 0."""
  _, session = open_session(ctx, db_file)
  if not yes and not click.confirm("Reset the score?", default=False):
    click.secho("Reset cancelled", fg="yellow")
    return
  session.reset_score()
  echo_score(session)

if __name__ == "__main__":
  cli()
