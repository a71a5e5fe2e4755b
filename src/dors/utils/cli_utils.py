"""Utility functions for CLI operations in Dors."""

from __future__ import annotations

import contextlib
import logging
import os
from typing import TYPE_CHECKING

import typer
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn

from dors.utils.log_setup import console, display_summary

if TYPE_CHECKING:
	from collections.abc import Callable, Iterator

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def progress_indicator(
	message: str,
	style: str = "spinner",
	total: int | None = None,
	transient: bool = False,
) -> Iterator[Callable[[int], None]]:
	"""
	Standardized progress indicator that supports different styles uniformly.

	Args:
	    message: The message to display with the progress indicator
	    style: The style of progress indicator - options:
	           - "spinner": Shows an indeterminate spinner
	           - "progress": Shows a determinate progress bar
	    total: For determinate progress, the total units of work
	    transient: Whether the progress indicator should disappear after completion

	Yields:
	    A callable that accepts an integer amount to advance the progress

	"""
	# No visual indicators in testing/CI environments
	if os.environ.get("PYTEST_CURRENT_TEST") or os.environ.get("CI"):
		yield lambda _: None
		return

	if style == "spinner":
		with console.status(message):
			yield lambda _: None
	elif style == "progress":
		progress = Progress(
			SpinnerColumn(),
			TextColumn("[progress.description]{task.description}"),
			BarColumn(),
			MofNCompleteColumn(),
			transient=transient,
			console=console,
		)
		with progress:
			task_id = progress.add_task(message, total=total or 1)
			yield lambda amount=1: progress.update(task_id, advance=amount)
	else:
		msg = f"unknown progress style: {style}"
		raise ValueError(msg)


def show_error(message: str, exception: Exception | None = None) -> None:
	"""
	Display an error summary with standardized formatting.

	Args:
	        message: The error message to display
	        exception: Optional exception that caused the error

	"""
	error_text = message
	if exception:
		error_text += f"\n\nDetails: {exception!s}"
		logger.debug("Error occurred", exc_info=exception)

	display_summary("error", error_text)


def show_warning(message: str) -> None:
	"""
	Display a warning summary with standardized formatting.

	Args:
	        message: The warning message to display

	"""
	display_summary("warning", message)


def exit_with_error(message: str, exit_code: int = 1, exception: Exception | None = None) -> None:
	"""
	Display an error message and exit.

	Args:
	        message: Error message to display
	        exit_code: Exit code to use
	        exception: Optional exception that caused the error

	"""
	show_error(message, exception)
	raise typer.Exit(exit_code) from exception


def handle_keyboard_interrupt() -> None:
	"""Handles KeyboardInterrupt by printing a message and exiting cleanly."""
	console.print("\n[yellow]Operation cancelled by user.[/yellow]")
	raise typer.Exit(130)
