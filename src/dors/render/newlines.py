"""Streaming filter that collapses runs of newlines."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from typing import TextIO


class MultiNewlineEliminator:
	"""
	Text writer wrapper that writes every run of newlines as a single newline.

	The only state kept between writes is the number of consecutive newlines
	seen so far, so output can be streamed in chunks of any size. All other
	characters pass through unchanged.

	"""

	def __init__(self, writer: TextIO) -> None:
		"""
		Initialize the filter.

		Args:
		    writer: Destination stream

		"""
		self.writer = writer
		self.newlines = 0

	def write(self, text: str) -> int:
		"""
		Write a chunk through the filter.

		Args:
		    text: Chunk to write

		Returns:
		    Number of characters consumed from the chunk

		"""
		out: list[str] = []
		for char in text:
			if char == "\n":
				self.newlines += 1
				if self.newlines > 1:
					continue
			else:
				self.newlines = 0
			out.append(char)
		if out:
			self.writer.write("".join(out))
		return len(text)

	def flush(self) -> None:
		"""Flush the underlying writer."""
		self.writer.flush()


def collapse_newlines(text: str) -> str:
	"""Return text with every run of newlines collapsed to one."""
	buffer = io.StringIO()
	MultiNewlineEliminator(buffer).write(text)
	return buffer.getvalue()
