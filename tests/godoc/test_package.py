"""Tests for assembling a package documentation model from a directory."""

from __future__ import annotations

import pytest

from dors.godoc import ParseError, find_module, parse_dir
from dors.godoc.reader import is_exported
from tests.base import FileSystemTestBase
from tests.godoc.go_sources import SHAPES_SOURCE, SHAPES_TEST_SOURCE


@pytest.mark.unit
def test_is_exported() -> None:
	"""Test exported names start with an upper case letter."""
	assert is_exported("Rect")
	assert not is_exported("rect")
	assert not is_exported("_Rect")
	assert not is_exported("")


@pytest.mark.unit
@pytest.mark.fs
class TestParseDir(FileSystemTestBase):
	"""Test cases for parse_dir."""

	@pytest.fixture(autouse=True)
	def shapes_module(self, setup_file_system: None) -> None:
		"""Create a module holding the shapes package and its examples."""
		self.create_test_file("go.mod", "module example.com/geo\n\ngo 1.22\n")
		self.create_test_file("shapes/shapes.go", SHAPES_SOURCE)
		self.create_test_file("shapes/shapes_test.go", SHAPES_TEST_SOURCE)

	def test_package_level(self) -> None:
		"""Test package metadata and package-level symbols."""
		result = parse_dir(self.temp_dir / "shapes")

		assert result is not None
		package, _ = result
		assert package.name == "shapes"
		assert package.import_path == "example.com/geo/shapes"
		assert package.filenames == ["shapes.go"]
		assert package.imports == ["errors", "example.com/geo/internal/units"]
		assert [f.name for f in package.funcs] == ["Origin", "Sum"]
		assert [v.names for v in package.consts] == [["Pi"]]
		assert [v.names for v in package.vars] == [["ErrNegative"]]
		assert not package.is_cmd

	def test_type_association(self) -> None:
		"""Test factories, methods and typed constants attach to their type."""
		package, _ = parse_dir(self.temp_dir / "shapes")
		types = {t.name: t for t in package.types}

		assert list(types) == ["Kind", "Rect", "Shape"]
		assert [f.name for f in types["Rect"].funcs] == ["NewRect"]
		assert [m.name for m in types["Rect"].methods] == ["Area"]
		assert [v.names for v in types["Kind"].consts] == [["Circle", "Square"]]
		assert types["Rect"].spec.startswith("Rect struct")

	def test_examples_attached(self) -> None:
		"""Test examples land on the package, functions, factories and methods."""
		package, _ = parse_dir(self.temp_dir / "shapes")
		types = {t.name: t for t in package.types}

		assert [e.output for e in package.examples] == ["3.14"]
		assert [e.output for e in types["Rect"].funcs[0].examples] == ["6"]
		assert [e.suffix for e in types["Rect"].methods[0].examples] == ["square"]
		assert len(next(f for f in package.funcs if f.name == "Sum").examples) == 1

	def test_unexported(self) -> None:
		"""Test unexported symbols are kept on request."""
		package, _ = parse_dir(self.temp_dir / "shapes", include_unexported=True)
		types = {t.name: t for t in package.types}

		assert "point" in types
		assert [f.name for f in types["point"].funcs] == ["newPoint"]
		assert [m.name for m in types["Rect"].methods] == ["Area", "scale"]

	def test_module_lookup(self) -> None:
		"""Test the enclosing go.mod is found from nested directories."""
		module, root = find_module((self.temp_dir / "shapes").resolve())

		assert module == "example.com/geo"
		assert root == self.temp_dir.resolve()

	def test_command_package(self) -> None:
		"""Test main packages are named after their directory."""
		self.create_test_file("cmd/geotool/main.go", "// Package main is the geometry tool.\npackage main\n\nfunc main() {}\n")

		package, _ = parse_dir(self.temp_dir / "cmd" / "geotool")

		assert package.is_cmd
		assert package.name == "geotool"
		assert package.doc == "the geometry tool.\n"
		assert package.import_path == "example.com/geo/cmd/geotool"
		assert package.funcs == []

	def test_no_buildable_files(self) -> None:
		"""Test a directory whose files are all build-ignored has no package."""
		self.create_test_file("tools/gen.go", "//go:build ignore\n\npackage main\n")

		assert parse_dir(self.temp_dir / "tools") is None

	def test_conflicting_packages(self) -> None:
		"""Test files declaring different packages fail the directory."""
		self.create_test_file("mixed/a.go", "package a\n")
		self.create_test_file("mixed/b.go", "package b\n")

		with pytest.raises(ParseError, match="found packages a and b"):
			parse_dir(self.temp_dir / "mixed")

	def test_broken_test_file_keeps_package(self, caplog: pytest.LogCaptureFixture) -> None:
		"""Test a malformed _test.go file only loses its examples."""
		self.create_test_file("shapes/broken_test.go", "package shapes\n\nfunc Example( {\n")

		package, _ = parse_dir(self.temp_dir / "shapes")

		assert package.name == "shapes"
		assert "Skipping examples" in caplog.text
