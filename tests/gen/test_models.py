"""Tests for the generation models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from dors.config import DEFAULT_CONFIG, SECTIONS
from dors.gen.errors import PackageLoadError
from dors.gen.models import GenReport, PackageNode, ProcessingConfig, RenderConfig, SummaryNode, WriteReport, iter_nodes
from dors.godoc import Package


def _node(path: str, *, files: bool = True) -> PackageNode:
	return PackageNode(path=path, doc_model=Package(name=path or "root", filenames=["x.go"] if files else []))


@pytest.mark.unit
class TestRenderConfig:
	"""Test cases for RenderConfig."""

	def test_defaults(self) -> None:
		"""Test every section is rendered by default."""
		config = RenderConfig()

		assert config.include_sections == frozenset(SECTIONS)
		assert config.exclude_paths == frozenset()
		assert config.recursive
		assert config.respect_case

	def test_empty_sections_mean_all(self) -> None:
		"""Test an empty section list renders everything."""
		assert RenderConfig(include_sections=[]).include_sections == frozenset(SECTIONS)

	def test_sections_normalized(self) -> None:
		"""Test section names are case-insensitive."""
		config = RenderConfig(include_sections=["Functions", " types "])

		assert config.has_section("functions")
		assert config.has_section("types")
		assert not config.has_section("methods")

	def test_unknown_section(self) -> None:
		"""Test unknown sections are rejected with the available names."""
		with pytest.raises(ValidationError, match="unknown sections bogus"):
			RenderConfig(include_sections=["bogus"])

	def test_exclude_paths_normalized(self) -> None:
		"""Test exclusion entries are normalized on construction."""
		config = RenderConfig(exclude_paths=["./a/vendor/", "b\\c", "."])

		assert config.exclude_paths == frozenset({"a/vendor", "b/c"})

	def test_frozen(self) -> None:
		"""Test the configuration cannot be modified."""
		config = RenderConfig()

		with pytest.raises(ValidationError):
			config.title = "x"

	def test_from_config(self) -> None:
		"""Test file values are layered under explicit overrides."""
		gen_config = dict(DEFAULT_CONFIG["gen"], title="From file", short=True, unknown_key=1)

		config = RenderConfig.from_config(gen_config, title="From flag", short=None)

		assert config.title == "From flag"
		assert config.short is True


@pytest.mark.unit
class TestProcessingConfig:
	"""Test cases for ProcessingConfig."""

	def test_defaults(self) -> None:
		"""Test the defaults match the default configuration."""
		config = ProcessingConfig.from_config(DEFAULT_CONFIG["processing"])

		assert config.max_workers is None
		assert config.max_open_files == 10

	def test_unknown_keys_ignored(self) -> None:
		"""Test extra keys in the section are ignored."""
		config = ProcessingConfig.from_config({"max_workers": 4, "chunk_size": 3})

		assert config.max_workers == 4

	@pytest.mark.parametrize("section", [{"max_workers": 0}, {"max_open_files": -1}, {"max_workers": "many"}])
	def test_invalid_sizes(self, section: dict[str, object]) -> None:
		"""Test pool sizes that are not positive integers are rejected."""
		with pytest.raises(ValidationError):
			ProcessingConfig.from_config(section)


@pytest.mark.unit
class TestNodes:
	"""Test cases for the tree node types."""

	def test_template_tags(self) -> None:
		"""Test each render target names its template."""
		assert PackageNode.template_name == "package.md.j2"
		assert SummaryNode(packages=()).template_name == "summary.md.j2"

	def test_walk_pre_order(self) -> None:
		"""Test nodes are walked parent first."""
		root = _node("")
		a = _node("a")
		ab = _node("a/b")
		a.children.append(ab)
		root.children.append(a)

		assert [n.path for n in iter_nodes([root])] == ["", "a", "a/b"]

	def test_has_source(self) -> None:
		"""Test nodes without filenames have no document of their own."""
		assert _node("a").has_source
		assert not _node("a", files=False).has_source


@pytest.mark.unit
def test_gen_report_failures() -> None:
	"""Test load and write failures are merged and sorted by path."""
	write = WriteReport(written=["a/DOCS.md"], failures=[("c", OSError("disk full"))])
	report = GenReport(load_errors=[PackageLoadError("b", "syntax error")], write=write)

	assert [path for path, _ in report.failures] == ["b", "c"]
	assert not report.ok
	assert GenReport().ok
