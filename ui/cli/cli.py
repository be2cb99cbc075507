"""CLI entrypoint for the remindme engine."""

from __future__ import annotations

from pathlib import Path

import typer

from ui.cli import commands

app = typer.Typer(help="Local context intelligence for reminders and goals")
config_app = typer.Typer(help="Configuration commands")

DATA_OPTION = typer.Option(..., "--data", help="YAML or JSON snapshot of tasks and goals")


@app.command("parse")
def parse_cmd(text: str = typer.Argument(..., help="Free-form reminder text")) -> None:
    """Parse an utterance into task attributes."""
    commands.parse(text=text)


@app.command("intent")
def intent_cmd(text: str = typer.Argument(..., help="Utterance to classify")) -> None:
    """Detect the intent of an utterance."""
    commands.intent(text=text)


@app.command("ask")
def ask_cmd(
    text: str = typer.Argument(..., help="Utterance to answer"),
    data: Path = DATA_OPTION,
) -> None:
    """Answer an utterance against a snapshot."""
    commands.ask(text=text, data=data)


@app.command("urgency")
def urgency_cmd(
    data: Path = DATA_OPTION,
    due_within: float | None = typer.Option(None, "--due-within", help="Due-soon window in hours"),
) -> None:
    """Rank tasks by urgency and list overdue and due-soon tasks."""
    commands.urgency(data=data, due_within=due_within)


@app.command("chain")
def chain_cmd(
    name: str = typer.Argument(..., help="Chain name"),
    data: Path = DATA_OPTION,
) -> None:
    """Show chain progress for the snapshot's tasks and milestone order per goal."""
    commands.chain(name=name, data=data)


@config_app.command("show")
def config_show_cmd() -> None:
    """Show effective configuration."""
    commands.config_show()


app.add_typer(config_app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
