#!/usr/bin/env python3
"""Droplet form CLI"""

from __future__ import annotations

import sys
from contextlib import ExitStack
from pathlib import Path

import click

from droplet_form import __version__
from droplet_form.app import FormApp
from droplet_form.config import Settings
from droplet_form.console import CONSOLE, configure_logging, print_error
from droplet_form.form import FormController
from droplet_form.submission import SubmissionTask
from droplet_form.theme import DEFAULT_THEME
from droplet_form.views import render_result


@click.command()
@click.option("--wait-timeout", type=click.FloatRange(min=0, min_open=True), help="Seconds to wait for the Droplet to become active")
@click.option("--poll-interval", type=click.FloatRange(min=0, min_open=True), help="Seconds between action status checks")
@click.option("--token-env", help="Environment variable holding the DigitalOcean API token")
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path), help="Append log lines to this file")
@click.option("--debug", is_flag=True, help="Include debug lines in the log")
@click.version_option(__version__, prog_name="droplet-form")
def main(
    wait_timeout: float | None,
    poll_interval: float | None,
    token_env: str | None,
    log_file: Path | None,
    debug: bool,
):
    """Create a DigitalOcean Droplet from an interactive terminal form"""

    try:
        settings = Settings.from_env()
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    if wait_timeout is not None:
        settings.wait_timeout = wait_timeout
    if poll_interval is not None:
        settings.poll_interval = poll_interval
    if token_env:
        settings.token_env = token_env
    if log_file is not None:
        settings.log_file = log_file
    if debug:
        settings.debug = True

    controller = FormController()

    with ExitStack() as stack:
        stream = stack.enter_context(click.open_file(str(settings.log_file), "a")) if settings.log_file else None
        configure_logging(stream, settings.debug)

        try:
            app = FormApp(controller, SubmissionTask(settings), DEFAULT_THEME)
            app.run()
        except Exception as e:
            print_error(f"could not start program: {e.__class__.__name__}: {e}")
            sys.exit(1)
        finally:
            configure_logging(None)

    result = render_result(controller, DEFAULT_THEME)
    if result is not None:
        CONSOLE.print(result)


if __name__ == "__main__":
    main()
