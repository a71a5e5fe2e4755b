"""Utilities for handling paths and file system operations."""

from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath

from dors.utils.file_filters import normalize_rel_path

logger = logging.getLogger(__name__)


def relative_slash_path(path: Path, root: Path) -> str:
	"""
	Compute a slash separated path relative to the traversal root.

	The root itself maps to ``""``. When no relative path exists (for example a
	different drive on Windows) the absolute posix path is returned instead.

	Args:
	    path: Directory inside the tree
	    root: Traversal root

	Returns:
	    Normalized relative path, or a best-effort absolute path

	"""
	try:
		rel = os.path.relpath(path, root)
	except ValueError:
		logger.warning("Unable to compute path of %s relative to %s, using absolute path", path, root)
		return Path(path).resolve().as_posix()
	return normalize_rel_path(rel)


def link_between(from_dir: str, to_dir: str) -> str:
	"""
	Relative link from one tree directory to another.

	Args:
	    from_dir: Relative directory holding the linking document
	    to_dir: Relative directory of the target

	Returns:
	    A ``./``-prefixed posix path, ``.`` when both are the same directory

	"""
	start = PurePosixPath(from_dir or ".")
	target = PurePosixPath(to_dir or ".")
	rel = os.path.relpath(target, start).replace(os.sep, "/")
	return rel if rel.startswith("..") or rel == "." else f"./{rel}"
