"""CLI entry point for pi-shell. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import sys
from functools import partial

import click

from pi.shell.editor import EditorLoop, run_session
from pi.shell.errors import ModeFailure, ReadFailure
from pi.shell.executor import CommandExecutor
from pi.shell.history import HistoryStore
from pi.shell.line_buffer import LineBuffer
from pi.shell.prompt import current_prompt
from pi.shell.settings import EOF_POLICIES, LOG_LEVELS, ShellSettings, load_settings
from pi.shell.terminal import ProcessTerminal, Terminal

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(settings: ShellSettings) -> None:
    level = getattr(logging, settings.log_level.upper())
    if settings.log_file:
        logging.basicConfig(level=level, format=_LOG_FORMAT, filename=settings.log_file)
    else:
        # The terminal belongs to the editor; only surface warnings and worse.
        logging.basicConfig(level=max(level, logging.WARNING), format=_LOG_FORMAT)


def build_loop(settings: ShellSettings, terminal: Terminal | None = None) -> EditorLoop:
    return EditorLoop(
        terminal if terminal is not None else ProcessTerminal(),
        CommandExecutor(),
        prompt=partial(current_prompt, settings.prompt),
        history=HistoryStore(max_entries=settings.history_size),
        buffer=LineBuffer(max_length=settings.max_line_length),
        eof_policy=settings.eof_policy,
    )


@click.command()
@click.option("--prompt", default=None, help="Prompt template; may use {host}, {user} and {cwd}")
@click.option("--history-size", type=click.IntRange(min=1), default=None, help="Maximum history entries")
@click.option("--max-line-length", type=click.IntRange(min=1), default=None, help="Maximum line length in bytes")
@click.option(
    "--eof-policy",
    type=click.Choice(EOF_POLICIES),
    default=None,
    help="When Ctrl-D ends the session: always, or only on an empty line",
)
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Write logs to this file")
@click.option("--log-level", type=click.Choice(LOG_LEVELS), default=None, help="Logging level")
def main(prompt, history_size, max_line_length, eof_policy, log_file, log_level):
    """Interactive command shell with line editing and history."""
    try:
        settings = load_settings().with_overrides(
            prompt=prompt,
            history_size=history_size,
            max_line_length=max_line_length,
            eof_policy=eof_policy,
            log_file=log_file,
            log_level=log_level,
        )
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    configure_logging(settings)

    loop = build_loop(settings)
    try:
        run_session(loop)
    except (ReadFailure, ModeFailure) as e:
        logging.getLogger(__name__).debug("Fatal: %s", e)
        click.echo(f"pi-shell: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
