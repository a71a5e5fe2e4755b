"""Write rendered package documents to disk."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import TYPE_CHECKING

from dors.config import DEFAULT_CONFIG, DOC_FILENAME
from dors.render import Renderer

from .errors import CancelledError, RenderError
from .models import SummaryNode, WriteReport, iter_nodes

if TYPE_CHECKING:
	from collections.abc import Callable

	from .models import PackageNode, RenderConfig, RenderTarget

logger = logging.getLogger(__name__)


def doc_path(root_dir: Path, rel_path: str) -> Path:
	"""Location of the document for a tree directory."""
	return root_dir / rel_path / DOC_FILENAME if rel_path else root_dir / DOC_FILENAME


def needs_summary(nodes: list[PackageNode]) -> bool:
	"""
	Whether the root directory gets a summary document.

	The summary is written only when the root has no document of its own and
	at least one package below it does.

	"""
	root = next((node for node in nodes if node.path == ""), None)
	if root is not None and root.has_source:
		return False
	return any(node.has_source for node in iter_nodes(nodes))


class ReportWriter:
	"""Renders every documented node of a forest to its ``DOCS.md``."""

	def __init__(
		self,
		renderer: Renderer | None = None,
		*,
		max_open_files: int | None = None,
		log: logging.Logger | None = None,
	) -> None:
		"""
		Initialize the writer.

		Args:
		    renderer: Markdown renderer, a default one is created if omitted
		    max_open_files: Concurrent renders, each holding one open file
		    log: Logger receiving diagnostics, defaults to the module logger

		"""
		self.logger = log or logger
		self.renderer = renderer or Renderer(log=self.logger)
		self.max_open_files = max_open_files or DEFAULT_CONFIG["processing"]["max_open_files"]

	def write_document(self, target: RenderTarget, config: RenderConfig, path: Path) -> None:
		"""
		Render one target into a file.

		A failed render removes the partially written file.

		Raises:
		    RenderError: If rendering or writing fails

		"""
		if path.exists():
			self.logger.warning("Overwriting existing document %s", path)
		try:
			with path.open("w", encoding="utf-8", newline="\n") as f:
				self.renderer.render(target, config, f)
		except (RenderError, OSError) as e:
			path.unlink(missing_ok=True)
			if isinstance(e, RenderError):
				raise
			msg = f"writing {path}: {e}"
			raise RenderError(msg) from e

	def _write_node(
		self,
		node: PackageNode,
		root_dir: Path,
		config: RenderConfig,
		cancel: threading.Event | None,
	) -> str:
		if cancel is not None and cancel.is_set():
			raise CancelledError("writing cancelled")
		path = doc_path(root_dir, node.path)
		self.write_document(node, config, path)
		self.logger.debug("Wrote %s", path)
		return path.relative_to(root_dir).as_posix()

	def write_summary(self, nodes: list[PackageNode], root_dir: Path, config: RenderConfig) -> str:
		"""
		Write the root summary listing every documented package.

		Returns:
		    Path of the summary relative to the root

		"""
		documented = tuple(sorted((n for n in iter_nodes(nodes) if n.has_source), key=lambda n: n.path))
		summary = SummaryNode(packages=documented, title=config.title or root_dir.name)
		path = doc_path(root_dir, "")
		self.write_document(summary, config, path)
		self.logger.info("Wrote summary of %d packages to %s", len(documented), path)
		return path.relative_to(root_dir).as_posix()

	def write_all(
		self,
		nodes: list[PackageNode],
		root_dir: Path,
		config: RenderConfig,
		cancel: threading.Event | None = None,
		on_progress: Callable[[int], None] | None = None,
	) -> WriteReport:
		"""
		Write the documents of a forest.

		Args:
		    nodes: Transformed forest
		    root_dir: Root of the traversal
		    config: Render configuration
		    cancel: Optional event that stops the run when set
		    on_progress: Called with 1 after each package document, written or failed

		Returns:
		    Written document paths and per-document failures

		Raises:
		    CancelledError: If cancel was set before writing finished

		"""
		root = Path(root_dir).resolve()
		report = WriteReport()
		documented = [node for node in iter_nodes(nodes) if node.has_source]

		with ThreadPoolExecutor(max_workers=self.max_open_files, thread_name_prefix="dors-write") as executor:
			futures = {executor.submit(self._write_node, node, root, config, cancel): node for node in documented}
			for future in as_completed(futures):
				node = futures[future]
				try:
					report.written.append(future.result())
				except CancelledError:
					executor.shutdown(wait=True, cancel_futures=True)
					raise
				except (RenderError, OSError) as e:
					self.logger.error("Failed writing documentation for %s: %s", node.path or ".", e)
					report.failures.append((node.path, e))
				if on_progress is not None:
					on_progress(1)

		if needs_summary(nodes):
			try:
				report.summary_path = self.write_summary(nodes, root, config)
				report.written.append(report.summary_path)
			except RenderError as e:
				self.logger.error("Failed writing summary: %s", e)
				report.failures.append(("", e))

		report.written.sort()
		report.failures.sort(key=lambda failure: failure[0])
		return report
