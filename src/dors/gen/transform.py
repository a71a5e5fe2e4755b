"""Adjust loaded packages before rendering."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from dors.godoc import Example, Func, Package, TypeDoc

	from .models import PackageNode, RenderConfig

logger = logging.getLogger(__name__)


def _promote(package: Package, owner: Func | TypeDoc, examples: list[Example]) -> None:
	"""Copy a symbol's examples to the package list, inheriting its name and doc."""
	for example in examples:
		promoted = example.model_copy()
		if not promoted.name:
			promoted.name = owner.name
		if not promoted.doc:
			promoted.doc = owner.doc
		package.examples.append(promoted)


def promote_examples(package: Package, config: RenderConfig) -> None:
	"""
	Move examples of hidden sections onto the package's example list.

	Factories and methods are rendered inside their type, so hiding the
	types section hides them as well.

	"""
	if not config.has_section("functions"):
		for func in package.funcs:
			_promote(package, func, func.examples)

	types_hidden = not config.has_section("types")
	for type_doc in package.types:
		if types_hidden:
			_promote(package, type_doc, type_doc.examples)
		if types_hidden or not config.has_section("factories"):
			for func in type_doc.funcs:
				_promote(package, func, func.examples)
		if types_hidden or not config.has_section("methods"):
			for method in type_doc.methods:
				_promote(package, method, method.examples)


def transform(node: PackageNode, config: RenderConfig) -> PackageNode:
	"""
	Produce the render-ready version of a node.

	The input node is not modified. Children are transformed as well.

	Args:
	    node: Node produced by the collector
	    config: Render configuration

	Returns:
	    A new node with promoted examples, title override and sorted filenames

	"""
	package = node.doc_model.model_copy(deep=True)

	promote_examples(package, config)
	if config.title:
		package.name = config.title
	package.filenames.sort()

	logger.debug("Transformed %s: %d examples", node.path or ".", len(package.examples))
	return replace(
		node,
		doc_model=package,
		children=[transform(child, config) for child in node.children],
	)
