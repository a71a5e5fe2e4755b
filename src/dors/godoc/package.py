"""Load the Go package of a single directory."""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path

from dors.config import TEST_SUFFIX
from dors.utils.file_filters import list_source_files

from .extract import ParseError, parse_file
from .fileset import FileSet
from .model import Package
from .reader import CMD_DOC_PREFIX, new_package

logger = logging.getLogger(__name__)

GO_MOD = "go.mod"
_MODULE_RE = re.compile(r"^\s*module\s+\"?([^\s\"]+)\"?", re.MULTILINE)


@lru_cache(maxsize=256)
def find_module(directory: Path) -> tuple[str, Path | None]:
	"""
	Find the module enclosing a directory.

	Args:
	    directory: Absolute directory to start from

	Returns:
	    (module path, module root), or ("", None) when no go.mod is found

	"""
	for candidate in (directory, *directory.parents):
		go_mod = candidate / GO_MOD
		if not go_mod.is_file():
			continue
		try:
			match = _MODULE_RE.search(go_mod.read_text(encoding="utf-8", errors="replace"))
		except OSError:
			logger.warning("Unable to read %s", go_mod)
			return "", None
		if match:
			return match.group(1), candidate
		logger.warning("No module line in %s", go_mod)
		return "", None
	return "", None


def import_path_for(directory: Path) -> str:
	"""Compute the import path of a directory from its enclosing module."""
	module, root = find_module(directory)
	if not module or root is None:
		return ""
	rel = directory.relative_to(root).as_posix()
	return module if rel == "." else f"{module}/{rel}"


def parse_dir(directory: Path, *, include_unexported: bool = False) -> tuple[Package, FileSet] | None:
	"""
	Parse the Go package in a directory.

	Non-test files form the package; _test.go files are only scanned for
	examples. A test file that fails to parse loses its examples but does not
	fail the package.

	Args:
	    directory: Directory holding the package
	    include_unexported: Keep unexported symbols

	Returns:
	    The documentation model and its file set, or None when the directory
	    holds no buildable Go package

	Raises:
	    ParseError: If a source file is malformed or files disagree on the package name
	    OSError: If the directory or a file cannot be read

	"""
	directory = directory.resolve()
	fileset = FileSet()

	parsed_files = []
	for path in list_source_files(directory):
		parsed = parse_file(path, fileset)
		if parsed is not None:
			parsed_files.append(parsed)
	if not parsed_files:
		return None

	examples = []
	for path in list_source_files(directory, include_tests=True):
		if path.name.endswith(TEST_SUFFIX):
			try:
				parsed = parse_file(path, fileset, examples_only=True)
			except ParseError as e:
				logger.warning("Skipping examples in %s: %s", path, e)
				continue
			if parsed is not None:
				examples.extend(parsed.examples)

	package = new_package(
		parsed_files,
		examples,
		directory=str(directory),
		include_unexported=include_unexported,
	)
	package.import_path = import_path_for(directory)

	if package.is_cmd:
		package.name = directory.name
		package.doc = package.doc.removeprefix(CMD_DOC_PREFIX)

	return package, fileset
