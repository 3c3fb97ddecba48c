from __future__ import annotations

"""helpful demo command line.

Both commands load a config file and sleep for its ``timeout``.  ``sleep``
reports failures through helpful (message + call history), ``sleep-plain``
shows what the same failure looks like with a bare exception message.
"""

import asyncio
import json
from datetime import timedelta
from pathlib import Path

import typer
import yaml
from pydantic import BaseModel
from rich.console import Console

from helpful import MainResult, instrument, traced
from helpful.utils.logging import init as init_logging

app = typer.Typer(
    name="helpful-demo",
    help="Demo programs for helpful: errors with call history.",
    add_completion=False,
)

err_console = Console(stderr=True, highlight=False, markup=False, emoji=False, soft_wrap=True)


def _parse(path: Path, contents: str) -> dict:
    if path.suffix in {".yml", ".yaml"}:
        return yaml.safe_load(contents) or {}
    return json.loads(contents)


class Config(BaseModel):
    timeout: timedelta

    @staticmethod
    @instrument(target="config")
    @traced
    def load(path: Path) -> "Config":
        """Read a JSON or YAML config file."""
        contents = path.read_text(encoding="utf-8")
        return Config.model_validate(_parse(path, contents))

    @staticmethod
    def load_plain(path: Path) -> "Config":
        contents = path.read_text(encoding="utf-8")
        return Config.model_validate(_parse(path, contents))


class Cli(BaseModel):
    config: Path

    @instrument(target="cli")
    @traced
    async def run(self) -> None:
        config = Config.load(self.config)
        await asyncio.sleep(config.timeout.total_seconds())

    async def run_plain(self) -> None:
        config = Config.load_plain(self.config)
        await asyncio.sleep(config.timeout.total_seconds())


_CONFIG_HELP = "Path to a JSON or YAML file with a `timeout` (seconds)."


@app.command()
def sleep(config: Path = typer.Option(..., "--config", "-c", help=_CONFIG_HELP)):
    """Sleep for the configured timeout; failures show the call history."""
    init_logging()
    code = MainResult.from_call(asyncio.run, Cli(config=config).run()).report()
    raise typer.Exit(code=code)


@app.command("sleep-plain")
def sleep_plain(config: Path = typer.Option(..., "--config", "-c", help=_CONFIG_HELP)):
    """Same program without helpful: failures show only the message."""
    try:
        asyncio.run(Cli(config=config).run_plain())
    except Exception as e:  # noqa: BLE001
        err_console.print(f"Error: {e}")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
