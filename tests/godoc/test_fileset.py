"""Tests for source position bookkeeping."""

from __future__ import annotations

import pytest

from dors.godoc import NO_POS, FileSet, Position


@pytest.mark.unit
class TestFileSet:
	"""Test cases for FileSet."""

	def test_no_position(self) -> None:
		"""Test NO_POS resolves to an invalid position."""
		fileset = FileSet()
		position = fileset.position(NO_POS)

		assert position == Position()
		assert not position.is_valid()

	def test_positions_across_files(self) -> None:
		"""Test positions resolve to the right file and 1-based line."""
		fileset = FileSet()
		base_a = fileset.add_file("a.go", b"ab\ncd\n")
		base_b = fileset.add_file("b.go", b"package b\n")

		assert base_a == 1
		assert base_b > base_a + 6
		assert fileset.position(base_a) == Position("a.go", 1)
		assert fileset.position(base_a + 3) == Position("a.go", 2)
		assert fileset.position(base_b + 2) == Position("b.go", 1)
		assert fileset.filenames == ["a.go", "b.go"]

	def test_unknown_position(self) -> None:
		"""Test positions outside every file are invalid."""
		fileset = FileSet()
		base = fileset.add_file("a.go", b"x\n")

		assert not fileset.position(base + 100).is_valid()
