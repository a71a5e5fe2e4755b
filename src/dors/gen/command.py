"""Command implementation for package documentation generation."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING

from dors.utils.cli_utils import console, progress_indicator, show_error, show_warning

from .collector import TreeCollector
from .errors import CancelledError, FatalError
from .models import GenReport, iter_nodes
from .transform import transform
from .writer import ReportWriter

if TYPE_CHECKING:
	import threading

	from .models import RenderConfig

logger = logging.getLogger(__name__)


class GenCommand:
	"""Main implementation of the gen command."""

	def __init__(
		self,
		config: RenderConfig,
		*,
		max_workers: int | None = None,
		max_open_files: int | None = None,
		log: logging.Logger | None = None,
	) -> None:
		"""
		Initialize the gen command.

		Args:
		    config: Render configuration
		    max_workers: Concurrent package loads
		    max_open_files: Concurrent document renders
		    log: Logger receiving diagnostics, defaults to the module logger

		"""
		self.config = config
		self.logger = log or logger
		self.collector = TreeCollector(max_workers=max_workers, log=self.logger)
		self.writer = ReportWriter(max_open_files=max_open_files, log=self.logger)

	def run(self, root_dir: Path, cancel: threading.Event | None = None) -> GenReport:
		"""
		Collect, transform and write the documentation of a tree.

		Args:
		    root_dir: Root of the traversal
		    cancel: Optional event that stops the run when set

		Returns:
		    The run report

		Raises:
		    FatalError: If the root directory cannot be read
		    CancelledError: If cancel was set before the run finished

		"""
		start_time = time.time()
		root = Path(root_dir).resolve()

		with progress_indicator("Collecting packages..."):
			collected = self.collector.collect(root, self.config, cancel)

		nodes = [transform(node, self.config) for node in collected.nodes]

		documented = sum(1 for node in iter_nodes(nodes) if node.has_source)
		with progress_indicator("Writing documentation...", style="progress", total=documented) as advance:
			written = self.writer.write_all(nodes, root, self.config, cancel, on_progress=advance)

		report = GenReport(
			load_errors=collected.errors,
			write=written,
			package_count=documented,
			elapsed=time.time() - start_time,
		)
		self.logger.info(
			"Generated %d documents in %.2f seconds, %d failures",
			written.written_count,
			report.elapsed,
			len(report.failures),
		)
		return report

	def execute(self, root_dir: Path, cancel: threading.Event | None = None) -> bool:
		"""
		Execute the gen command and print a summary of the run.

		Args:
		    root_dir: Root of the traversal
		    cancel: Optional event that stops the run when set

		Returns:
		    True if every directory and document succeeded, False otherwise

		Raises:
		    FatalError: If the root directory cannot be read

		"""
		try:
			report = self.run(root_dir, cancel)
		except CancelledError:
			console.print("\n[yellow]Generation cancelled.[/yellow]")
			return False
		except FatalError:
			self.logger.exception("Error during gen command execution")
			raise

		if report.write.written_count == 0 and report.ok:
			show_warning(f"No Go packages found below {Path(root_dir).resolve()}")
		else:
			console.print(
				f"[green]Generated {report.write.written_count} documents "
				f"in {report.elapsed:.2f} seconds.[/green]"
			)
		if report.write.summary_path:
			console.print(f"[green]Summary written to {report.write.summary_path}[/green]")
		if self.config.verbose:
			for path in report.write.written:
				console.print(f"  {path}", markup=False)

		if not report.ok:
			lines = [f"{path or '.'}: {error}" for path, error in report.failures]
			show_error(f"{len(lines)} failures:\n" + "\n".join(lines))
		return report.ok
