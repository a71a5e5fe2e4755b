"""Load the documentation model of one directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from dors.godoc import FileSet, Package, ParseError, find_module, parse_dir

from .errors import NoPackageError, PackageLoadError

if TYPE_CHECKING:
	from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class LoadedPackage:
	"""Result of loading one directory."""

	doc_model: Package
	fileset: FileSet = field(default_factory=FileSet)
	module_name: str = ""


class PackageLoader:
	"""Wraps the Go documentation extractor for use by the tree collector."""

	def __init__(self, log: logging.Logger | None = None) -> None:
		"""
		Initialize the loader.

		Args:
		    log: Logger receiving diagnostics, defaults to the module logger

		"""
		self.logger = log or logger

	def load(self, directory: Path, *, include_unexported: bool = False, rel_path: str = "") -> LoadedPackage:
		"""
		Load the package in a directory.

		Args:
		    directory: Directory to load
		    include_unexported: Include non-exported symbols and methods
		    rel_path: Path relative to the traversal root, used in error messages

		Returns:
		    The documentation model, its position index and the module name

		Raises:
		    NoPackageError: If the directory holds no buildable package
		    PackageLoadError: If the sources cannot be parsed or read

		"""
		self.logger.debug("Loading package in %s", directory)
		try:
			result = parse_dir(directory, include_unexported=include_unexported)
		except ParseError as e:
			raise PackageLoadError(rel_path, str(e)) from e
		except OSError as e:
			raise PackageLoadError(rel_path, f"{type(e).__name__}: {e}") from e

		if result is None:
			raise NoPackageError(rel_path or str(directory))

		doc_model, fileset = result
		module_name, _ = find_module(directory.resolve())
		return LoadedPackage(doc_model=doc_model, fileset=fileset, module_name=module_name)

	def load_or_empty(self, directory: Path, *, include_unexported: bool = False, rel_path: str = "") -> LoadedPackage:
		"""
		Load a package, substituting an empty model when the directory has none.

		Raises:
		    PackageLoadError: If the sources cannot be parsed or read

		"""
		try:
			return self.load(directory, include_unexported=include_unexported, rel_path=rel_path)
		except NoPackageError:
			self.logger.debug("No package in %s, using an empty model", directory)
			module_name, _ = find_module(directory.resolve())
			return LoadedPackage(doc_model=Package.empty(), module_name=module_name)
