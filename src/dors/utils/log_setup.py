"""
Logging and console summaries for Dors.

Records reach the console through a Rich handler. ``--save-log`` adds a file
handler that keeps every record at DEBUG level, tagged with the worker thread
that emitted it.

"""

from __future__ import annotations

import datetime
import logging
import platform
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.rule import Rule
from rich.text import Text

console = Console()

LOG_DIR = Path("logs")
FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(threadName)s - %(module)s:%(lineno)d - %(message)s"

# Summary kind -> (title, colour)
SUMMARY_STYLES = {
	"error": ("Error Summary", "red"),
	"warning": ("Warning Summary", "yellow"),
}


def default_log_file(now: datetime.datetime | None = None) -> Path:
	"""Log file used by ``--save-log``: ``logs/dors_<UTC timestamp>.log``."""
	stamp = (now or datetime.datetime.now(tz=datetime.UTC)).strftime("%Y-%m-%d_%H-%M-%S")
	return LOG_DIR / f"dors_{stamp}.log"


def _console_handler(is_verbose: bool) -> logging.Handler:
	return RichHandler(
		console=console,
		level=logging.DEBUG if is_verbose else logging.WARNING,
		rich_tracebacks=True,
		show_time=True,
		show_path=is_verbose,
	)


def _file_handler(path: Path) -> logging.Handler:
	path.parent.mkdir(parents=True, exist_ok=True)
	handler = logging.FileHandler(path, mode="a", encoding="utf-8")
	handler.setLevel(logging.DEBUG)
	handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
	return handler


def setup_logging(
	is_verbose: bool = False,
	log_to_console: bool = True,
	log_file_path: Path | str | None = None,
) -> None:
	"""
	Replace the root logger's handlers with the Dors console and file handlers.

	The root level is the lowest level of the installed handlers, so a log file
	receives debug records even when the console only shows warnings. A log
	file that cannot be created is reported on the console and skipped.

	Args:
	    is_verbose: Show debug records on the console
	    log_to_console: Install the console handler
	    log_file_path: Optional file receiving every record

	"""
	handlers: list[logging.Handler] = []
	file_handler = None
	if log_to_console:
		handlers.append(_console_handler(is_verbose))
	if log_file_path:
		try:
			file_handler = _file_handler(Path(log_file_path))
			handlers.append(file_handler)
		except OSError as e:
			console.print(f"Failed to set up file logging to {log_file_path}: {e}", style="bold red", markup=False)

	root_logger = logging.getLogger()
	for handler in root_logger.handlers[:]:
		root_logger.removeHandler(handler)
	for handler in handlers:
		root_logger.addHandler(handler)

	fallback = logging.DEBUG if is_verbose else logging.WARNING
	root_logger.setLevel(min((handler.level for handler in handlers), default=fallback))
	if file_handler is not None:
		root_logger.debug("Logging to file: %s", log_file_path)


def log_environment_info() -> None:
	"""Log the Dors and Python versions and the working directory."""
	from dors import __version__

	logger = logging.getLogger(__name__)
	logger.info("Dors %s on Python %s (%s)", __version__, platform.python_version(), platform.platform())
	logger.info("Working directory: %s", Path.cwd())


def display_summary(kind: str, message: str) -> None:
	"""
	Print a message between two coloured rules.

	Args:
	    kind: ``"error"`` or ``"warning"``
	    message: Text to display, printed without markup

	"""
	title, colour = SUMMARY_STYLES[kind]
	console.print()
	console.print(Rule(Text(title, style=f"bold {colour}"), style=colour))
	console.print(f"\n{message}\n", markup=False)
	console.print(Rule(style=colour))
	console.print()
