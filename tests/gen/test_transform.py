"""Tests for the pre-render transformation."""

from __future__ import annotations

import pytest

from dors.gen.models import PackageNode, RenderConfig
from dors.gen.transform import transform
from dors.godoc import Example, Func, Package, TypeDoc


def _package() -> Package:
	return Package(
		name="shapes",
		doc="Package shapes.\n",
		filenames=["z.go", "a.go"],
		examples=[Example(code="pkg()")],
		funcs=[Func(name="Sum", doc="Sum adds.\n", examples=[Example(code="sum()")])],
		types=[
			TypeDoc(
				name="Rect",
				doc="Rect is a rectangle.\n",
				examples=[Example(code="rect()")],
				funcs=[Func(name="NewRect", examples=[Example(code="new()", doc="Own doc.\n")])],
				methods=[Func(name="Area", recv="*Rect", examples=[Example(name="Named", code="area()")])],
			)
		],
	)


def _codes(node: PackageNode) -> list[str]:
	return [e.code for e in node.doc_model.examples]


@pytest.mark.unit
class TestTransform:
	"""Test cases for transform."""

	def test_all_sections_keep_examples_in_place(self) -> None:
		"""Test nothing is promoted when every section is rendered."""
		result = transform(PackageNode(path="", doc_model=_package()), RenderConfig())

		assert _codes(result) == ["pkg()"]

	def test_hidden_functions(self) -> None:
		"""Test function examples move to the package and inherit name and doc."""
		config = RenderConfig(include_sections=["types", "methods", "factories"])

		result = transform(PackageNode(path="", doc_model=_package()), config)

		assert _codes(result) == ["pkg()", "sum()"]
		promoted = result.doc_model.examples[1]
		assert promoted.name == "Sum"
		assert promoted.doc == "Sum adds.\n"

	def test_hidden_types(self) -> None:
		"""Test hiding types promotes type, factory and method examples."""
		config = RenderConfig(include_sections=["functions"])

		result = transform(PackageNode(path="", doc_model=_package()), config)

		assert _codes(result) == ["pkg()", "rect()", "new()", "area()"]
		examples = result.doc_model.examples
		assert examples[1].name == "Rect"
		assert examples[2].doc == "Own doc.\n"
		assert examples[3].name == "Named"

	def test_hidden_methods_only(self) -> None:
		"""Test hiding methods promotes only method examples."""
		config = RenderConfig(include_sections=["functions", "types", "factories"])

		result = transform(PackageNode(path="", doc_model=_package()), config)

		assert _codes(result) == ["pkg()", "area()"]

	def test_each_example_promoted_once(self) -> None:
		"""Test hiding several sections never duplicates an example."""
		config = RenderConfig(include_sections=["constants"])

		result = transform(PackageNode(path="", doc_model=_package()), config)

		codes = _codes(result)
		assert sorted(codes) == sorted(set(codes))
		assert len(codes) == 5

	def test_input_not_mutated(self) -> None:
		"""Test the collected node is left untouched."""
		node = PackageNode(path="", doc_model=_package())

		transform(node, RenderConfig(title="Docs", include_sections=["constants"]))

		assert node.doc_model.name == "shapes"
		assert _codes(node) == ["pkg()"]
		assert node.doc_model.filenames == ["z.go", "a.go"]

	def test_title_and_filenames(self) -> None:
		"""Test the title overrides the name and filenames are sorted."""
		result = transform(PackageNode(path="", doc_model=_package()), RenderConfig(title="Docs"))

		assert result.doc_model.name == "Docs"
		assert result.doc_model.filenames == ["a.go", "z.go"]

	def test_children_transformed(self) -> None:
		"""Test the transformation recurses into children."""
		child = PackageNode(path="a", doc_model=Package(name="a", filenames=["b.go", "a.go"]))
		node = PackageNode(path="", doc_model=_package(), children=[child])

		result = transform(node, RenderConfig())

		assert result.children[0] is not child
		assert result.children[0].doc_model.filenames == ["a.go", "b.go"]
