"""Errors raised while collecting and writing package documentation."""

from __future__ import annotations


class DorsError(Exception):
	"""Base class for documentation generation errors."""


class NoPackageError(DorsError):
	"""A directory holds no buildable Go package."""

	def __init__(self, path: str) -> None:
		"""Initialize with the directory that has no package."""
		self.path = path
		super().__init__(f"no packages found in {path}")


class PackageLoadError(DorsError):
	"""A directory could not be parsed into a documentation model."""

	def __init__(self, path: str, reason: str) -> None:
		"""
		Initialize the load error.

		Args:
		    path: Directory relative to the traversal root ("" for the root)
		    reason: What went wrong

		"""
		self.path = path
		self.reason = reason
		super().__init__(f"failed loading {path or '.'}: {reason}")


class RenderError(DorsError):
	"""A document could not be rendered or written; its content is not trustworthy."""


class FatalError(DorsError):
	"""The run cannot continue, for example because the root is unreadable."""


class CancelledError(DorsError):
	"""The run was cancelled before it finished."""
