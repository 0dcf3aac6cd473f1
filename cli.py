"""Command-line interface for Vision Board Assistant."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional
from uuid import UUID

import click

from config import LOG_LEVEL, RECENT_BOARDS_LIMIT, STORE_FILE
from core.catalog import SubscriptionTier, VisionBoardLayout, VisionBoardStyle
from core.errors import VisionBoardError
from core.ledger import EntitlementLedger
from core.models import VisionBoard
from core.persistence import open_store
from core.repository import BoardRepository
from features.board_generation import BoardPipeline, PipelineConfig
from integrations.camera import load_selfie
from integrations.speech import ConsoleSpeaker, speak_affirmation
from utils.logging_config import setup_logging


class Services:
    """Service objects built once per invocation and shared by commands."""

    def __init__(self, store_path: Optional[Path] = None):
        self.store = open_store(store_path)
        self.ledger = EntitlementLedger(self.store)
        self.repository = BoardRepository(self.store, ledger=self.ledger)

    def pipeline(self, config: Optional[PipelineConfig] = None) -> BoardPipeline:
        return BoardPipeline(self.repository, ledger=self.ledger, config=config)


def _services(ctx: click.Context) -> Services:
    return ctx.obj["services"]


def _board_id(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError:
        raise click.BadParameter(f"{value!r} is not a board id")


def _owner_id(ctx: click.Context) -> UUID:
    """Id of the signed-in user; board commands only see that user's boards."""
    user = _services(ctx).ledger.current_user
    if user is None:
        raise click.ClickException("Not signed in")
    return user.id


def _echo_board_line(board: VisionBoard) -> None:
    star = "★" if board.is_favorite else " "
    click.echo(
        f"{star} {board.id}  {board.title}  "
        f"[{board.layout.display_name}, {board.style.display_name}]  "
        f"views={board.view_count}"
    )


class _Group(click.Group):
    """Turns domain errors into clean CLI errors."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except VisionBoardError as e:
            raise click.ClickException(str(e)) from e


@click.group(cls=_Group)
@click.option(
    "--store",
    "-s",
    type=click.Path(dir_okay=False),
    default=None,
    help=f"Path to the JSON store (default: {STORE_FILE})",
)
@click.option("--verbose", "-v", is_flag=True, help="Log to stdout")
@click.pass_context
def cli(ctx: click.Context, store: Optional[str], verbose: bool) -> None:
    """Vision Board Assistant command-line interface."""
    if verbose:
        setup_logging(LOG_LEVEL)
    ctx.ensure_object(dict)
    ctx.obj["services"] = Services(Path(store) if store else None)


# ----------------------------------------------------------------------
# Account
# ----------------------------------------------------------------------

@cli.command()
@click.argument("email")
@click.argument("username")
@click.pass_context
def signup(ctx: click.Context, email: str, username: str) -> None:
    """Create an account and sign in."""
    user = _services(ctx).ledger.sign_up(email, username)
    click.echo(f"Welcome, {user.username}! Tier: {user.subscription_type.display_name}")


@cli.command()
@click.argument("email")
@click.pass_context
def signin(ctx: click.Context, email: str) -> None:
    """Sign in with an email."""
    user = _services(ctx).ledger.sign_in(email)
    click.echo(f"Signed in as {user.username}")


@cli.command()
@click.pass_context
def signout(ctx: click.Context) -> None:
    """Sign out and forget the stored user."""
    _services(ctx).ledger.sign_out()
    click.echo("Signed out")


@cli.command()
@click.argument("tier", type=click.Choice([t.value for t in SubscriptionTier]))
@click.pass_context
def tier(ctx: click.Context, tier: str) -> None:
    """Set the subscription tier of the current user."""
    ledger = _services(ctx).ledger
    if not ledger.is_logged_in:
        raise click.ClickException("Not signed in")
    ledger.update_tier(SubscriptionTier(tier))
    click.echo(f"Tier set to {SubscriptionTier(tier).display_name}")


@cli.group()
def goal() -> None:
    """Manage manifestation goals."""


@goal.command("add")
@click.argument("text")
@click.pass_context
def goal_add(ctx: click.Context, text: str) -> None:
    _services(ctx).ledger.add_goal(text)
    click.echo(f"Added goal: {text}")


@goal.command("remove")
@click.argument("text")
@click.pass_context
def goal_remove(ctx: click.Context, text: str) -> None:
    _services(ctx).ledger.remove_goal(text)
    click.echo(f"Removed goal: {text}")


# ----------------------------------------------------------------------
# Boards
# ----------------------------------------------------------------------

@cli.command()
@click.argument("selfie", type=click.Path(exists=True, dir_okay=False))
@click.option("--title", "-t", required=True)
@click.option("--description", "-d", required=True)
@click.option(
    "--layout",
    type=click.Choice([layout.value for layout in VisionBoardLayout]),
    default=VisionBoardLayout.GRID_3X3.value,
    show_default=True,
)
@click.option(
    "--style",
    type=click.Choice([style.value for style in VisionBoardStyle]),
    default=VisionBoardStyle.CINEMATIC.value,
    show_default=True,
)
@click.option("--goal", "goals", multiple=True, help="Manifestation goal (repeatable)")
@click.option("--no-mirror", is_flag=True, help="Keep the selfie orientation as is")
@click.pass_context
def create(
    ctx: click.Context,
    selfie: str,
    title: str,
    description: str,
    layout: str,
    style: str,
    goals: tuple[str, ...],
    no_mirror: bool,
) -> None:
    """Generate a vision board from a selfie."""
    services = _services(ctx)
    _owner_id(ctx)
    if not goals:
        user = services.ledger.current_user
        goals = tuple(user.manifestation_goals) if user else ()

    capture = load_selfie(selfie, mirror=not no_mirror)
    pipeline = services.pipeline()

    def on_progress(snapshot: dict) -> None:
        click.echo(f"  {snapshot['progress']:4.0%}  {snapshot['stage']}")

    pipeline.add_observer(on_progress)
    board = asyncio.run(
        pipeline.create_board(
            title=title,
            description=description,
            selfie_bytes=capture.image_bytes,
            layout=VisionBoardLayout(layout),
            style=VisionBoardStyle(style),
            goals=list(goals),
        )
    )
    click.echo(f"Created vision board {board.id}")
    for affirmation in board.affirmations:
        click.echo(f"  • {affirmation}")


@cli.command("list")
@click.option("--favorites", is_flag=True, help="Only favorite boards")
@click.option(
    "--recent",
    type=int,
    is_flag=False,
    flag_value=RECENT_BOARDS_LIMIT,
    default=None,
    help=f"Newest N boards (N defaults to {RECENT_BOARDS_LIMIT})",
)
@click.option("--search", "query", default=None, help="Filter by title, description or goal")
@click.pass_context
def list_boards(ctx: click.Context, favorites: bool, recent: Optional[int], query: Optional[str]) -> None:
    """List saved vision boards."""
    repository = _services(ctx).repository
    owner_id = _owner_id(ctx)
    if favorites:
        boards = repository.list_favorites(owner_id=owner_id)
    elif recent is not None:
        boards = repository.list_recent(recent, owner_id=owner_id)
    elif query:
        boards = repository.search(query, owner_id=owner_id)
    else:
        boards = repository.list(owner_id=owner_id)
    if query:
        boards = [board for board in boards if board.matches(query)]
    if not boards:
        click.echo("No vision boards yet.")
        return
    for board in boards:
        _echo_board_line(board)


@cli.command()
@click.argument("board_id")
@click.pass_context
def show(ctx: click.Context, board_id: str) -> None:
    """Show a board (counts as a view)."""
    board = _services(ctx).repository.increment_view_count(_board_id(board_id), owner_id=_owner_id(ctx))
    if board is None:
        raise click.ClickException(f"No vision board {board_id}")
    _echo_board_line(board)
    click.echo(board.description)
    for image in board.images:
        click.echo(f"  [{image.position}] {image.prompt} -> {image.image_url or '<inline image>'}")


@cli.command()
@click.argument("board_id")
@click.pass_context
def favorite(ctx: click.Context, board_id: str) -> None:
    """Toggle a board's favorite flag."""
    board = _services(ctx).repository.toggle_favorite(_board_id(board_id), owner_id=_owner_id(ctx))
    if board is None:
        raise click.ClickException(f"No vision board {board_id}")
    click.echo("Favorited" if board.is_favorite else "Unfavorited")


@cli.command()
@click.argument("board_id")
@click.pass_context
def delete(ctx: click.Context, board_id: str) -> None:
    """Delete a board."""
    if not _services(ctx).repository.delete(_board_id(board_id), owner_id=_owner_id(ctx)):
        raise click.ClickException(f"No vision board {board_id}")
    click.echo("Deleted")


@cli.command()
@click.argument("board_id")
@click.option("--index", "-i", type=int, default=0, show_default=True)
@click.pass_context
def speak(ctx: click.Context, board_id: str, index: int) -> None:
    """Read one of a board's affirmations aloud."""
    board = _services(ctx).repository.get(_board_id(board_id), owner_id=_owner_id(ctx))
    if speak_affirmation(ConsoleSpeaker(), board, index) is None:
        click.echo("This board has no affirmations.")


@cli.command()
@click.argument("board_id")
@click.pass_context
def share(ctx: click.Context, board_id: str) -> None:
    """Print shareable text for a board."""
    board = _services(ctx).repository.get(_board_id(board_id), owner_id=_owner_id(ctx))
    click.echo(board.share_text())


@cli.command()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Show board and subscription statistics."""
    services = _services(ctx)
    user = services.ledger.current_user
    remaining = services.ledger.remaining_boards()
    if user is None:
        boards = views = 0
    else:
        boards = services.repository.total_boards(owner_id=user.id)
        views = services.repository.total_views(owner_id=user.id)
    click.echo(f"Boards: {boards}")
    click.echo(f"Views: {views}")
    click.echo(f"Tier: {user.subscription_type.display_name if user else 'Free'}")
    click.echo(f"Remaining: {'∞' if remaining is None else remaining}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
