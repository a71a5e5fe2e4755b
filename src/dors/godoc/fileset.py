"""Source position bookkeeping for parsed Go files."""

from __future__ import annotations

import bisect
import threading
from dataclasses import dataclass, field

NO_POS = 0


@dataclass(frozen=True)
class Position:
	"""A resolved source position."""

	filename: str = ""
	line: int = 0

	def is_valid(self) -> bool:
		"""Return True when the position points into a file."""
		return self.line > 0


@dataclass
class _File:
	name: str
	base: int
	size: int
	line_offsets: list[int] = field(default_factory=list)


class FileSet:
	"""
	Maps compact integer positions to file names and line numbers.

	Every added file reserves the range ``[base, base + size]``. A position is
	``base + byte_offset`` of the file it belongs to, and ``NO_POS`` (0) means
	"no position". Bases start at 1 so that offset 0 of the first file is still
	a valid position.

	"""

	def __init__(self) -> None:
		"""Initialize an empty file set."""
		self._files: list[_File] = []
		self._bases: list[int] = []
		self._next_base = 1
		self._lock = threading.Lock()

	def add_file(self, name: str, content: bytes) -> int:
		"""
		Register a file and return its base position.

		Args:
		    name: Path of the file
		    content: Raw file content, used to compute line offsets

		Returns:
		    The base to add to byte offsets of this file

		"""
		offsets = [0]
		offsets.extend(i + 1 for i, byte in enumerate(content) if byte == ord("\n"))
		with self._lock:
			base = self._next_base
			self._files.append(_File(name=name, base=base, size=len(content), line_offsets=offsets))
			self._bases.append(base)
			self._next_base = base + len(content) + 1
		return base

	def position(self, pos: int) -> Position:
		"""
		Resolve a position to its file and 1-based line.

		Args:
		    pos: Position previously produced from a base returned by add_file

		Returns:
		    The resolved position, or an empty Position for NO_POS/unknown positions

		"""
		if pos == NO_POS:
			return Position()
		index = bisect.bisect_right(self._bases, pos) - 1
		if index < 0:
			return Position()
		file = self._files[index]
		offset = pos - file.base
		if offset > file.size:
			return Position()
		line = bisect.bisect_right(file.line_offsets, offset)
		return Position(filename=file.name, line=line)

	@property
	def filenames(self) -> list[str]:
		"""Names of all registered files in insertion order."""
		return [f.name for f in self._files]
