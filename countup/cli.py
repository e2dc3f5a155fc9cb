"""countup CLI - animated counters that settle once per session."""

import logging
from typing import Optional

import click
from rich.logging import RichHandler

from .config import ConfigManager, CounterConfigError, counter_from_dict
from .theme import PALETTE, console
from .ui.live import format_value, run_counter


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


# CLI Commands
@click.group()
@click.option("--debug", is_flag=True, help="Log registry commits and counter state")
def cli(debug):
    """COUNTUP - animated numeric counters.

    Each named counter animates once per session and then shows its
    settled value immediately.
    """
    _configure_logging(debug)


@cli.command()
@click.argument("name")
@click.option("--end", "-e", required=True, help="Value to count to")
@click.option("--start", "-s", default="0", show_default=True, help="Value to count from")
@click.option("--duration", "-d", default=None, type=float, help="Animation length in seconds")
@click.option("--persist/--no-persist", default=None, help="Animate only once per session")
@click.option("--label", "-l", default="", help="Caption shown before the value")
@click.option("--repeat", "-r", default=1, show_default=True, type=click.IntRange(min=1),
              help="Mount the counter this many times in the same session")
@click.option("--config", "config_path", default=None, help="Config file path")
def run(name, end, start, duration, persist, label, repeat, config_path):
    """Animate a single counter in the terminal."""
    manager = ConfigManager(config_path)
    defaults = manager.get_defaults()
    fps = manager.get_fps()

    entry = {"name": name, "end": end, "start": start, "label": label}
    if duration is not None:
        entry["duration"] = duration
    if persist is not None:
        entry["persist"] = persist

    try:
        config = counter_from_dict(entry, {k: v for k, v in defaults.items() if k != "fps"})
    except CounterConfigError as e:
        raise click.UsageError(str(e))

    for _ in range(repeat):
        run_counter(config, console=console, fps=fps)


@cli.command()
@click.option("--config", "config_path", default=None, help="Config file path")
def dashboard(config_path: Optional[str]):
    """Open the fullscreen counter dashboard."""
    from .app import CounterDashboard

    manager = ConfigManager(config_path)
    counters = manager.get_counters()
    if not counters:
        raise click.ClickException(f"No valid counters in {manager.config_path}")

    CounterDashboard(counters, fps=manager.get_fps()).run()


@cli.command()
@click.option("--config", "config_path", default=None, help="Config file path")
def config(config_path: Optional[str]):
    """Show configuration."""
    manager = ConfigManager(config_path)
    defaults = manager.get_defaults()

    console.print(f"Config file: {manager.config_path}")
    console.print(
        f"Defaults: duration={defaults['duration']}s "
        f"persist={defaults['persist']} fps={manager.get_fps()}"
    )
    counters = manager.get_counters()
    console.print(f"Counters ({len(counters)}):")
    for c in counters:
        flag = "" if c.persist else "  [no-persist]"
        console.print(
            f"  {c.name:<16}{format_value(c.start)} -> {format_value(c.end)}"
            f"  {c.duration:g}s{flag}",
            style=PALETTE.text_primary,
            highlight=False,
            markup=False,
        )


if __name__ == "__main__":
    cli()
