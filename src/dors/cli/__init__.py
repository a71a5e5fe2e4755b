"""Command-line interface package for Dors."""

from __future__ import annotations

import logging
import sys
from typing import Annotated

import typer

from dors import __version__
from dors.utils.log_setup import default_log_file, log_environment_info, setup_logging

from .gen_cmd import register_command as register_gen_command

logger = logging.getLogger(__name__)

app = typer.Typer(
	help=f"Dors - Markdown documentation for Go package trees\n\nVersion: {__version__}",
	no_args_is_help=True,
	context_settings={"help_option_names": ["-h", "--help"]},
)

# --- Global Options Callback ---


def _version_callback(value: bool) -> None:
	"""Callback for --version option."""
	if value:
		typer.echo(f"Dors version: {__version__}")
		raise typer.Exit


@app.callback(invoke_without_command=True)
def global_options(
	ctx: typer.Context,
	is_verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose logging.")] = False,
	is_output_log: Annotated[
		bool,
		typer.Option(
			"--save-log",
			help="Enable logging to a file. Logs to logs/dors_{datetime}.log.",
		),
	] = False,
	_version: Annotated[
		bool | None,
		typer.Option("--version", help="Show version and exit.", callback=_version_callback, is_eager=True),
	] = None,
) -> None:
	"""Global CLI options and logging setup."""
	ctx.meta["is_verbose"] = is_verbose
	ctx.meta["is_output_log"] = is_output_log

	setup_logging(is_verbose=is_verbose, log_file_path=default_log_file() if is_output_log else None)
	if is_verbose or is_output_log:
		log_environment_info()


# --- Register commands ---

register_gen_command(app)


# --- Main Entry Point ---
def main() -> int:
	"""Run the CLI application."""
	return app()


if __name__ == "__main__":
	sys.exit(main())
