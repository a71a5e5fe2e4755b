"""Directory and file filtering utilities for Dors."""

from __future__ import annotations

import logging
import posixpath
from typing import TYPE_CHECKING

from dors.config import SOURCE_SUFFIX, TEST_SUFFIX

if TYPE_CHECKING:
	from collections.abc import Iterable
	from pathlib import Path

logger = logging.getLogger(__name__)


def normalize_rel_path(path: str) -> str:
	"""
	Normalize a relative path to the slash separated, cleaned form used for matching.

	Backslashes become slashes, ``.`` and ``..`` segments are resolved and
	leading ``./`` or trailing ``/`` are removed. The traversal root is ``""``.

	Args:
	    path: Relative path as configured or computed

	Returns:
	    The normalized path

	"""
	cleaned = posixpath.normpath(path.replace("\\", "/").strip())
	if cleaned in (".", "/"):
		return ""
	return cleaned.lstrip("/")


def normalize_exclude_paths(paths: Iterable[str]) -> frozenset[str]:
	"""
	Normalize configured exclusion paths.

	Entries that normalize to the root are dropped, an empty entry never
	excludes the whole tree.

	"""
	normalized = set()
	for path in paths:
		entry = normalize_rel_path(path)
		if entry:
			normalized.add(entry)
		else:
			logger.warning("Ignoring exclude path %r: it names the root directory", path)
	return frozenset(normalized)


def is_hidden(rel_path: str) -> bool:
	"""Return True when any component of the relative path starts with a dot."""
	return any(part.startswith(".") for part in rel_path.split("/") if part)


def is_excluded(rel_path: str, exclude_paths: Iterable[str], *, respect_case: bool = True) -> bool:
	"""
	Decide whether a relative directory path is excluded.

	A path is excluded when it is hidden, equals an exclusion entry, or lies
	below one (``rel_path`` starts with ``entry + "/"``). There are no glob
	semantics: excluding ``vendor`` does not exclude ``vendor2``.

	Args:
	    rel_path: Normalized path relative to the traversal root
	    exclude_paths: Normalized exclusion entries
	    respect_case: Compare case-sensitively

	Returns:
	    True if the directory and its subtree must be skipped

	"""
	if is_hidden(rel_path):
		return True
	if not rel_path:
		return False

	candidate = rel_path if respect_case else rel_path.casefold()
	for entry in exclude_paths:
		if not respect_case:
			entry = entry.casefold()
		if candidate == entry or candidate.startswith(entry + "/"):
			return True
	return False


def is_source_file(name: str, *, include_tests: bool = False) -> bool:
	"""Return True for Go source file names, excluding tests unless requested."""
	if not name.endswith(SOURCE_SUFFIX):
		return False
	return include_tests or not name.endswith(TEST_SUFFIX)


def list_source_files(directory: Path, *, include_tests: bool = False) -> list[Path]:
	"""
	List the eligible source files of a directory, sorted by name.

	Args:
	    directory: Directory to scan (not recursive)
	    include_tests: Also return _test.go files

	Returns:
	    Sorted paths of matching regular files

	Raises:
	    OSError: If the directory itself cannot be read

	"""
	return sorted(
		(entry for entry in directory.iterdir() if entry.is_file() and is_source_file(entry.name, include_tests=include_tests)),
		key=lambda p: p.name,
	)


def has_eligible_files(directory: Path) -> bool:
	"""
	Check whether a directory holds at least one non-test Go file.

	Args:
	    directory: Directory to check

	Returns:
	    False for empty directories or directories with only tests/other files

	Raises:
	    OSError: If the directory itself cannot be read

	"""
	return any(entry.is_file() and is_source_file(entry.name) for entry in directory.iterdir())
