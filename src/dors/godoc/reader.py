"""Assemble parsed Go files into a package documentation model."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .extract import ParseError, base_type_name
from .model import Example, Func, Package, TypeDoc, Value

if TYPE_CHECKING:
	from collections.abc import Iterable

	from .extract import FuncDecl, ParsedFile, ValueGroup

logger = logging.getLogger(__name__)

CMD_DOC_PREFIX = "Package main is "


def is_exported(name: str) -> bool:
	"""Report whether a Go identifier is exported."""
	return bool(name) and name[0].isupper()


def _factory_target(decl: FuncDecl, types: dict[str, TypeDoc]) -> str:
	"""
	Return the type a function constructs, or an empty string.

	A function is a factory for T when its results are T or *T, optionally
	followed by other results of type ``error``.

	"""
	if decl.func.recv or not decl.result_types:
		return ""
	target = ""
	for result in decl.result_types:
		if result.strip() == "error":
			continue
		name = base_type_name(result)
		if name not in types or (target and name != target):
			return ""
		target = name
	return target


def _value_target(group: ValueGroup, types: dict[str, TypeDoc]) -> str:
	"""Return the type every spec of a value group is declared with, if any."""
	declared = {base_type_name(t) for t in group.spec_types if t}
	if len(declared) != 1 or any(not t for t in group.spec_types):
		return ""
	name = declared.pop()
	return name if name in types else ""


def _keep_value(value: Value, include_unexported: bool) -> bool:
	return include_unexported or any(is_exported(name) for name in value.names)


class _Reader:
	"""Collects declarations from several files of the same package."""

	def __init__(self, include_unexported: bool) -> None:
		self.include_unexported = include_unexported
		self.name = ""
		self.docs: list[str] = []
		self.imports: set[str] = set()
		self.types: dict[str, TypeDoc] = {}
		self.funcs: list[FuncDecl] = []
		self.values: list[ValueGroup] = []

	def read(self, parsed: ParsedFile, directory: str) -> None:
		if self.name and parsed.package != self.name:
			msg = f"found packages {self.name} and {parsed.package}"
			raise ParseError(directory, msg)
		self.name = parsed.package
		if parsed.doc:
			self.docs.append(parsed.doc)
		self.imports.update(parsed.imports)
		for type_doc in parsed.types:
			self.types.setdefault(type_doc.name, type_doc)
		self.funcs.extend(parsed.funcs)
		self.values.extend(parsed.values)

	def build(self) -> Package:
		package = Package(
			name=self.name,
			doc="\n".join(doc.rstrip("\n") for doc in self.docs) + "\n" if self.docs else "",
			imports=sorted(self.imports),
		)

		# Methods and factories first, while unexported types are still known
		for decl in self.funcs:
			func = decl.func
			if func.recv:
				owner = self.types.get(decl.recv_base)
				if owner is None:
					logger.debug("Dropping method %s on unknown receiver %s", func.name, func.recv)
				elif self.include_unexported or is_exported(func.name):
					owner.methods.append(func)
				continue
			if not (self.include_unexported or is_exported(func.name)):
				continue
			target = _factory_target(decl, self.types)
			if target:
				self.types[target].funcs.append(func)
			else:
				package.funcs.append(func)

		for group in self.values:
			if not _keep_value(group.value, self.include_unexported):
				continue
			target = _value_target(group, self.types)
			if target:
				bucket = self.types[target].consts if group.kind == "const" else self.types[target].vars
			else:
				bucket = package.consts if group.kind == "const" else package.vars
			bucket.append(group.value)

		for name, type_doc in self.types.items():
			if self.include_unexported or is_exported(name):
				package.types.append(type_doc)
				continue
			# Hidden types hand their constructors and values to the package
			package.funcs.extend(type_doc.funcs)
			package.consts.extend(type_doc.consts)
			package.vars.extend(type_doc.vars)

		package.funcs.sort(key=lambda f: f.name)
		package.types.sort(key=lambda t: t.name)
		for type_doc in package.types:
			type_doc.funcs.sort(key=lambda f: f.name)
			type_doc.methods.sort(key=lambda f: f.name)

		if package.name == "main":
			package.is_cmd = True
		return package


def attach_examples(package: Package, examples: Iterable[tuple[str, Example]]) -> None:
	"""
	Attach examples to the symbols they illustrate.

	``Example`` goes to the package, ``ExampleF`` to function F (factories
	included), ``ExampleT`` to type T and ``ExampleT_M`` to method M of T.
	Examples for unknown symbols are dropped.

	"""
	funcs: dict[str, Func] = {f.name: f for f in package.funcs}
	types: dict[str, TypeDoc] = {}
	for type_doc in package.types:
		types[type_doc.name] = type_doc
		funcs.update((f.name, f) for f in type_doc.funcs)

	for target, example in examples:
		if not target:
			package.examples.append(example)
		elif target in funcs:
			funcs[target].examples.append(example)
		elif target in types:
			types[target].examples.append(example)
		elif "_" in target:
			type_name, method_name = target.split("_", 1)
			owner = types.get(type_name)
			method = next((m for m in owner.methods if m.name == method_name), None) if owner else None
			if method is None:
				logger.debug("Dropping example for unknown symbol %s", target)
				continue
			method.examples.append(example)
		else:
			logger.debug("Dropping example for unknown symbol %s", target)

	package.examples.sort(key=lambda e: (e.name, e.suffix))


def new_package(
	files: list[ParsedFile],
	examples: Iterable[tuple[str, Example]] = (),
	*,
	directory: str,
	include_unexported: bool = False,
) -> Package:
	"""
	Compute the documentation model for the files of one package.

	Args:
	    files: Parsed non-test files of the package
	    examples: (target, example) pairs collected from test files
	    directory: Directory of the package, used for messages and command names
	    include_unexported: Keep unexported symbols and methods

	Returns:
	    The package documentation model

	Raises:
	    ParseError: If the files declare different packages

	"""
	reader = _Reader(include_unexported)
	for parsed in files:
		reader.read(parsed, directory)
	package = reader.build()
	package.filenames = sorted(parsed.name for parsed in files)
	attach_examples(package, examples)
	return package
