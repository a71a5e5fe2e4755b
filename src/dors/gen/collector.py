"""Collect package documentation from a directory tree."""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from pathlib import Path
from typing import TYPE_CHECKING

from dors.utils.file_filters import has_eligible_files, is_excluded
from dors.utils.path_utils import relative_slash_path

from .errors import CancelledError, DorsError, FatalError, PackageLoadError
from .loader import PackageLoader
from .models import CollectResult, PackageNode

if TYPE_CHECKING:
	from collections.abc import Iterator
	from concurrent.futures import Future

	from .models import RenderConfig

logger = logging.getLogger(__name__)


def link_tree(nodes: list[PackageNode]) -> list[PackageNode]:
	"""
	Attach every node to its nearest collected ancestor.

	Runs single-threaded after collection. Nodes without a collected ancestor
	become roots of the returned forest. Roots and children are sorted by path.

	Args:
	    nodes: Flat list of nodes with empty children

	Returns:
	    The sorted forest

	"""
	ordered = sorted(nodes, key=lambda n: n.path)
	by_path = {node.path: node for node in ordered}
	roots: list[PackageNode] = []

	for node in ordered:
		parent = None
		if node.path:
			parts = node.path.split("/")
			for depth in range(len(parts) - 1, -1, -1):
				parent = by_path.get("/".join(parts[:depth]))
				if parent is not None:
					break
		if parent is None:
			roots.append(node)
		else:
			parent.children.append(node)

	for node in ordered:
		node.children.sort(key=lambda n: n.path)
	return roots


class TreeCollector:
	"""
	Walks a directory tree and loads the package of every eligible directory.

	The walk is single-threaded; package loads run on a thread pool. The list
	of loaded nodes is the only state shared between tasks and is guarded by a
	lock held only while appending.

	"""

	def __init__(
		self,
		loader: PackageLoader | None = None,
		*,
		max_workers: int | None = None,
		log: logging.Logger | None = None,
	) -> None:
		"""
		Initialize the collector.

		Args:
		    loader: Package loader, a default one is created if omitted
		    max_workers: Concurrent loads, None lets the executor decide
		    log: Logger receiving diagnostics, defaults to the module logger

		"""
		self.logger = log or logger
		self.loader = loader or PackageLoader(log=self.logger)
		self.max_workers = max_workers

	def _walk(
		self,
		root: Path,
		config: RenderConfig,
		errors: list[DorsError],
		cancel: threading.Event | None,
	) -> Iterator[tuple[Path, str]]:
		"""Yield (directory, relative path) for every eligible directory."""

		def on_error(error: OSError) -> None:
			self.logger.error("Unable to read directory %s: %s", error.filename, error.strerror)
			rel = relative_slash_path(Path(error.filename), root) if error.filename else ""
			errors.append(PackageLoadError(rel, f"unreadable directory: {error.strerror}"))

		for dirpath, dirnames, _ in os.walk(root, topdown=True, onerror=on_error):
			if cancel is not None and cancel.is_set():
				raise CancelledError("collection cancelled")

			directory = Path(dirpath)
			rel_path = relative_slash_path(directory, root)

			if is_excluded(rel_path, config.exclude_paths, respect_case=config.respect_case):
				self.logger.debug("Excluding %s", rel_path)
				dirnames.clear()
				continue

			if not config.recursive:
				dirnames.clear()
			else:
				dirnames.sort()

			try:
				eligible = has_eligible_files(directory)
			except OSError as e:
				on_error(e)
				continue

			if eligible:
				yield directory, rel_path
			else:
				self.logger.debug("No Go files in %s", rel_path or ".")

	def _load(
		self,
		directory: Path,
		rel_path: str,
		config: RenderConfig,
		nodes: list[PackageNode],
		lock: threading.Lock,
		cancel: threading.Event | None,
	) -> None:
		if cancel is not None and cancel.is_set():
			return
		loaded = self.loader.load_or_empty(directory, include_unexported=config.unexported, rel_path=rel_path)
		node = PackageNode(
			path=rel_path,
			doc_model=loaded.doc_model,
			position_index=loaded.fileset,
			module_name=loaded.module_name,
		)
		with lock:
			nodes.append(node)

	def collect(
		self,
		root_dir: Path,
		config: RenderConfig,
		cancel: threading.Event | None = None,
	) -> CollectResult:
		"""
		Collect the package forest below a root directory.

		Args:
		    root_dir: Root of the traversal
		    config: Render configuration (exclusions, recursion, unexported)
		    cancel: Optional event that stops the run when set

		Returns:
		    The sorted forest and the per-directory errors

		Raises:
		    FatalError: If the root directory cannot be read
		    CancelledError: If cancel was set before collection finished

		"""
		root = Path(root_dir).resolve()
		if not root.is_dir():
			msg = f"root directory {root} does not exist or is not a directory"
			raise FatalError(msg)
		try:
			has_eligible_files(root)
		except OSError as e:
			msg = f"unable to read root directory {root}: {e}"
			raise FatalError(msg) from e

		nodes: list[PackageNode] = []
		errors: list[DorsError] = []
		lock = threading.Lock()
		pending: dict[Future[None], str] = {}

		self.logger.info("Collecting packages below %s", root)
		with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="dors-load") as executor:
			try:
				for directory, rel_path in self._walk(root, config, errors, cancel):
					future = executor.submit(self._load, directory, rel_path, config, nodes, lock, cancel)
					pending[future] = rel_path
			except CancelledError:
				executor.shutdown(wait=True, cancel_futures=True)
				raise
			wait(pending)

		if cancel is not None and cancel.is_set():
			raise CancelledError("collection cancelled")

		for future, rel_path in pending.items():
			error = future.exception()
			if error is None:
				continue
			if not isinstance(error, PackageLoadError):
				error = PackageLoadError(rel_path, f"{type(error).__name__}: {error}")
			self.logger.error("Skipping %s: %s", rel_path or ".", error.reason)
			errors.append(error)

		forest = link_tree(nodes)
		errors.sort(key=lambda e: getattr(e, "path", ""))
		self.logger.info("Collected %d packages, %d failures", len(nodes), len(errors))
		return CollectResult(nodes=forest, errors=errors)
