"""Treehouse CLI - look after Buddy from the terminal.

Each command loads Buddy from the data directory, applies one action
(which persists the new snapshot) and prints Buddy's status.

Usage:
    treehouse status
    treehouse feed apple
    treehouse stars 10
    treehouse unlock outfit pirate
    treehouse run --interval 60
"""

from __future__ import annotations

import time
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from treehouse.app.config import TreehouseConfig, set_config
from treehouse.core import events
from treehouse.core.event_bus import EventPayload
from treehouse.core.models.needs import GAUGES
from treehouse.core.scheduler import TickScheduler
from treehouse.core.store import BuddySnapshot, BuddyStore
from treehouse.core.transitions import Transition
from treehouse.core.unlocks import UnlockKind
from treehouse.systems.storage.snapshot_store import SnapshotStore
from treehouse.utils.logging import setup_logging


app = typer.Typer(
    name="treehouse",
    help="Buddy's Treehouse - a virtual pet that lives in your terminal",
    add_completion=False,
)
console = Console()

MOOD_FACES = {
    "happy": "😊",
    "excited": "🤩",
    "sad": "😢",
    "tired": "😴",
    "hungry": "😋",
}
GAUGE_COLORS = {
    "hunger": "magenta",
    "energy": "cyan",
    "happiness": "yellow",
}


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


# ============================================================================
# Helpers
# ============================================================================


def _open_store(ctx: typer.Context) -> BuddyStore:
    config: TreehouseConfig = ctx.obj
    return BuddyStore(SnapshotStore(config.data_dir, config.storage_key))


def _bar(value: float, width: int = 20) -> str:
    filled = round(value / 100 * width)
    return "█" * filled + "░" * (width - filled)


def render_status(snapshot: BuddySnapshot) -> Panel:
    """Build the status panel for a snapshot."""
    state = snapshot.state

    needs = Table.grid(padding=(0, 1))
    for gauge in GAUGES:
        value = getattr(state.needs, gauge)
        color = GAUGE_COLORS[gauge]
        needs.add_row(gauge.capitalize(), f"[{color}]{_bar(value)}[/{color}]", f"{value:5.1f}%")

    info = Table.grid(padding=(0, 1))
    info.add_row("Mood", f"{MOOD_FACES.get(snapshot.mood.value, '')} {snapshot.mood.value}")
    info.add_row("Level", str(state.level))
    info.add_row("Stars", f"⭐ {state.total_stars}")
    info.add_row("Experience", str(state.experience))
    info.add_row("Activities", str(state.activities_completed))
    info.add_row("Outfit", state.current_outfit)
    info.add_row("Activities unlocked", ", ".join(sorted(state.unlocked_activities)))
    info.add_row("Outfits unlocked", ", ".join(sorted(state.unlocked_outfits)))
    if state.unlocked_items:
        info.add_row("Items", ", ".join(sorted(state.unlocked_items)))
    if state.badges:
        info.add_row("Badges", ", ".join(sorted(state.badges)))
    food = ", ".join(f"{name} x{count}" for name, count in sorted(state.food_items.items()))
    info.add_row("Food", food or "-")
    info.add_row("Toys", ", ".join(sorted(state.toys)) or "-")

    layout = Table.grid()
    layout.add_row(needs)
    layout.add_row("")
    layout.add_row(info)
    return Panel(layout, title="🐻 Buddy", border_style="blue")


def _report(store: BuddyStore, transition: Transition, message: str, ignored_message: str) -> None:
    if transition.changed:
        console.print(f"[green]{message}[/green]")
    else:
        console.print(f"[yellow]{ignored_message}[/yellow]")
    console.print(render_status(store.snapshot()))


# ============================================================================
# Commands
# ============================================================================


@app.callback()
def main_callback(
    ctx: typer.Context,
    data_dir: Annotated[Optional[Path], typer.Option("--data-dir", "-d", help="Directory holding Buddy's save")] = None,
    config_path: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to configuration file")] = None,
    log_level: Annotated[Optional[LogLevel], typer.Option("--log-level", "-l", help="Logging level")] = None,
):
    """Load configuration and logging before any command runs."""
    load_dotenv()
    config = TreehouseConfig.load(config_path)
    if data_dir is not None:
        config.data_dir = data_dir
    if log_level is not None:
        config.log_level = log_level.value

    setup_logging(
        level=config.log_level,
        log_dir=config.log_dir,
        file_output=config.log_dir is not None,
    )
    set_config(config)
    ctx.obj = config


@app.command("status")
def status(ctx: typer.Context):
    """Show Buddy's needs, mood and progress."""
    store = _open_store(ctx)
    console.print(render_status(store.snapshot()))


@app.command("feed")
def feed(
    ctx: typer.Context,
    food: Annotated[str, typer.Argument(help="Food to give (apple, cookie, carrot, pizza...)")] = "apple",
):
    """Feed Buddy one serving of food from the inventory."""
    store = _open_store(ctx)
    transition = store.feed(food)
    _report(store, transition, f"Buddy ate the {food}!", f"No {food} left in the pantry.")


@app.command("pet")
def pet(ctx: typer.Context):
    """Pet Buddy."""
    store = _open_store(ctx)
    _report(store, store.pet(), "Buddy loves the attention!", "Buddy can't get any happier.")


@app.command("play")
def play(ctx: typer.Context):
    """Play with Buddy."""
    store = _open_store(ctx)
    _report(store, store.play(), "Buddy had fun playing!", "Buddy is all played out.")


@app.command("sleep")
def sleep(ctx: typer.Context):
    """Put Buddy to bed."""
    store = _open_store(ctx)
    _report(store, store.sleep(), "Buddy had a good nap.", "Buddy is already rested.")


@app.command("tick")
def tick(
    ctx: typer.Context,
    count: Annotated[int, typer.Option("--count", "-n", min=1, help="Number of decay steps")] = 1,
):
    """Let time pass by COUNT decay steps."""
    store = _open_store(ctx)
    for _ in range(count):
        store.tick()
    console.print(f"[dim]{count} tick(s) passed.[/dim]")
    console.print(render_status(store.snapshot()))


@app.command("stars")
def stars(
    ctx: typer.Context,
    amount: Annotated[int, typer.Argument(help="Stars earned")],
):
    """Award stars (levels up every 50 stars)."""
    store = _open_store(ctx)
    transition = store.add_stars(amount)
    data = transition.data
    if transition.changed and data["new_level"] > data["old_level"]:
        console.print(f"[bold magenta]Level up! Buddy is now level {data['new_level']}.[/bold magenta]")
    for unlock in data.get("unlocked", []):
        console.print(f"[bold green]New {unlock['kind']} unlocked: {unlock['name']}[/bold green]")
    _report(store, transition, f"+{amount} stars", "No stars awarded.")


@app.command("xp")
def experience(
    ctx: typer.Context,
    amount: Annotated[int, typer.Argument(help="Experience earned")],
):
    """Award experience points."""
    store = _open_store(ctx)
    _report(store, store.add_experience(amount), f"+{amount} XP", "No experience awarded.")


@app.command("complete")
def complete(
    ctx: typer.Context,
    activity: Annotated[str, typer.Argument(help="Name of the finished activity")],
):
    """Record a finished activity."""
    store = _open_store(ctx)
    if not store.is_activity_unlocked(activity):
        console.print(f"[yellow]Note: '{activity}' is not unlocked yet.[/yellow]")
    _report(store, store.complete_activity(activity), f"Well done on {activity}!", "")


@app.command("unlock")
def unlock(
    ctx: typer.Context,
    kind: Annotated[UnlockKind, typer.Argument(help="outfit, activity or item")],
    name: Annotated[str, typer.Argument(help="Name to unlock")],
):
    """Unlock an outfit, activity or item."""
    store = _open_store(ctx)
    _report(store, store.unlock(kind, name), f"Unlocked {kind.value} '{name}'.", f"'{name}' was already unlocked.")


@app.command("badge")
def badge(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Badge to award")],
):
    """Award a badge."""
    store = _open_store(ctx)
    _report(store, store.award_badge(name), f"Badge earned: {name}", f"'{name}' was already earned.")


@app.command("wear")
def wear(
    ctx: typer.Context,
    outfit: Annotated[str, typer.Argument(help="Outfit to put on")],
):
    """Dress Buddy in an unlocked outfit."""
    store = _open_store(ctx)
    _report(store, store.wear_outfit(outfit), f"Buddy is wearing {outfit}.", f"Outfit '{outfit}' isn't available.")


@app.command("run")
def run(
    ctx: typer.Context,
    interval: Annotated[Optional[float], typer.Option("--interval", "-i", help="Seconds between ticks")] = None,
    duration: Annotated[Optional[float], typer.Option("--duration", help="Stop after this many seconds")] = None,
):
    """Keep Buddy alive: tick on a timer until interrupted."""
    config: TreehouseConfig = ctx.obj
    store = _open_store(ctx)
    tick_interval = interval if interval is not None else config.tick_interval_seconds

    def on_mood_changed(payload: EventPayload) -> None:
        face = MOOD_FACES.get(payload["new_mood"], "")
        console.print(f"{face} Buddy is now {payload['new_mood']}")

    store.subscribe(events.TOPIC_MOOD_CHANGED, on_mood_changed)
    console.print(f"[dim]Ticking every {tick_interval:g}s. Press Ctrl+C to stop.[/dim]")

    scheduler = TickScheduler(store, interval=tick_interval)
    with scheduler:
        try:
            if duration is None:
                while True:
                    time.sleep(1)
            else:
                time.sleep(duration)
        except KeyboardInterrupt:
            console.print("\n[dim]Stopping...[/dim]")

    store.unsubscribe(events.TOPIC_MOOD_CHANGED, on_mood_changed)
    console.print(f"[dim]{scheduler.ticks} tick(s) applied.[/dim]")
    console.print(render_status(store.snapshot()))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
