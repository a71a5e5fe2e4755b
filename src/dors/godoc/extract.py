"""Extract declarations from Go source files with Tree-sitter."""

from __future__ import annotations

import logging
import re
import textwrap
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tree_sitter_language_pack import get_parser

from .model import Example, Func, TypeDoc, Value

if TYPE_CHECKING:
	from pathlib import Path

	from tree_sitter import Node

	from .fileset import FileSet

logger = logging.getLogger(__name__)

GO_LANGUAGE = "go"

# Comment lines that are tool directives rather than documentation
_DIRECTIVE_RE = re.compile(r"^(line |extern |export |[a-z0-9]+:[a-z0-9])")
_OUTPUT_RE = re.compile(r"^//\s*(unordered\s+)?output:(.*)$", re.IGNORECASE)
_TYPE_ARGS_RE = re.compile(r"\[.*\]$", re.DOTALL)
_BUILD_IGNORE_RE = re.compile(rb"^//\s*(go:build|\+build)\s+ignore\s*$", re.MULTILINE)
_PACKAGE_CLAUSE_RE = re.compile(rb"^package\s", re.MULTILINE)


class ParseError(Exception):
	"""Raised when Go source cannot be turned into a documentation model."""

	def __init__(self, path: str, message: str, line: int = 0) -> None:
		"""
		Initialize the parse error.

		Args:
		    path: File or directory the error relates to
		    message: Human-readable description
		    line: 1-based line of the error, 0 when unknown

		"""
		self.path = path
		self.line = line
		location = f"{path}:{line}" if line else path
		super().__init__(f"{location}: {message}")


@dataclass
class FuncDecl:
	"""A function or method plus the details needed to associate it."""

	func: Func
	recv_base: str = ""
	result_types: list[str] = field(default_factory=list)


@dataclass
class ValueGroup:
	"""A const/var declaration together with the declared type of each spec."""

	kind: str
	value: Value
	spec_types: list[str] = field(default_factory=list)


@dataclass
class ParsedFile:
	"""Everything extracted from a single Go file."""

	name: str
	package: str = ""
	doc: str = ""
	imports: list[str] = field(default_factory=list)
	funcs: list[FuncDecl] = field(default_factory=list)
	types: list[TypeDoc] = field(default_factory=list)
	values: list[ValueGroup] = field(default_factory=list)
	examples: list[tuple[str, Example]] = field(default_factory=list)


# --- Helpers --- #


def _text(node: Node | None, content: bytes) -> str:
	if node is None:
		return ""
	return content[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _first_error(node: Node) -> Node | None:
	"""Return the first ERROR or MISSING node in document order."""
	stack = [node]
	while stack:
		current = stack.pop()
		if current.type == "ERROR" or current.is_missing:
			return current
		if current.has_error:
			stack.extend(reversed(current.children))
	return None


def base_type_name(expr: str) -> str:
	"""
	Reduce a type expression to the name of the named type it refers to.

	``*List[T]`` becomes ``List``, ``(*Buffer)`` becomes ``Buffer``.

	"""
	name = expr.strip().strip("()").lstrip("*").strip()
	return _TYPE_ARGS_RE.sub("", name)


def comment_text(comments: list[str]) -> str:
	"""
	Convert raw comment tokens into documentation text.

	Line comments lose their ``//`` marker and one following space, block
	comments lose their delimiters and common indentation. Directives such as
	``//go:generate`` are dropped.

	Args:
	    comments: Raw comment tokens in source order

	Returns:
	    The documentation text ending in a newline, or an empty string

	"""
	lines: list[str] = []
	for raw in comments:
		if raw.startswith("//"):
			body = raw[2:]
			if _DIRECTIVE_RE.match(body):
				continue
			lines.append(body[1:] if body.startswith(" ") else body)
		else:
			lines.extend(textwrap.dedent(raw[2:-2].lstrip("\n")).splitlines())

	# Collapse runs of blank lines and trim the ends
	cleaned: list[str] = []
	for line in lines:
		stripped = line.rstrip()
		if not stripped and (not cleaned or not cleaned[-1]):
			continue
		cleaned.append(stripped)
	while cleaned and not cleaned[-1]:
		cleaned.pop()
	return "\n".join(cleaned) + "\n" if cleaned else ""


def _starts_line(node: Node) -> bool:
	# Newline terminators end on the row of the node that follows them
	prev = node.prev_sibling
	return prev is None or prev.type == "\n" or prev.end_point[0] < node.start_point[0]


def _doc_comment(node: Node, content: bytes) -> str:
	"""Collect the comment block directly above a node."""
	comments: list[str] = []
	expected_row = node.start_point[0] - 1
	sibling = node.prev_sibling
	while sibling is not None and sibling.type == "comment" and sibling.end_point[0] == expected_row:
		if not _starts_line(sibling):
			break
		comments.append(_text(sibling, content))
		expected_row = sibling.start_point[0] - 1
		sibling = sibling.prev_sibling
	comments.reverse()
	return comment_text(comments)


def _names(node: Node) -> list[Node]:
	# Name fields span comma separated lists, skip the commas
	return [n for n in node.children_by_field_name("name") if n.is_named]


def _param_types(node: Node | None, content: bytes) -> list[str]:
	"""List the type of each result in a result clause."""
	if node is None:
		return []
	if node.type != "parameter_list":
		return [_text(node, content)]
	types: list[str] = []
	for child in node.named_children:
		if child.type not in ("parameter_declaration", "variadic_parameter_declaration"):
			continue
		type_text = _text(child.child_by_field_name("type"), content)
		count = max(1, len(_names(child)))
		types.extend([type_text] * count)
	return types


def _specs(node: Node, spec_type: str) -> list[Node]:
	"""Return the spec nodes of a declaration, looking through spec lists."""
	specs: list[Node] = []
	for child in node.named_children:
		if child.type == spec_type:
			specs.append(child)
		elif child.type.endswith("_spec_list"):
			specs.extend(c for c in child.named_children if c.type == spec_type)
	return specs


def _is_grouped(node: Node) -> bool:
	return any(child.type == "(" for child in node.children) or any(
		child.type.endswith("_spec_list") for child in node.named_children
	)


# --- Declarations --- #


def _read_func(node: Node, content: bytes, base: int) -> FuncDecl:
	name = _text(node.child_by_field_name("name"), content)
	func = Func(
		name=name,
		doc=_doc_comment(node, content),
		type_params=_text(node.child_by_field_name("type_parameters"), content),
		params=_text(node.child_by_field_name("parameters"), content) or "()",
		results=_text(node.child_by_field_name("result"), content),
		source=_text(node, content),
		pos=base + node.start_byte,
	)
	decl = FuncDecl(func=func, result_types=_param_types(node.child_by_field_name("result"), content))

	receiver = node.child_by_field_name("receiver")
	if receiver is not None:
		params = [c for c in receiver.named_children if c.type == "parameter_declaration"]
		if params:
			func.recv = _text(params[0].child_by_field_name("type"), content)
			func.recv_name = _text(params[0].child_by_field_name("name"), content)
		decl.recv_base = base_type_name(func.recv)
	return decl


def _read_types(node: Node, content: bytes, base: int) -> list[TypeDoc]:
	decl_doc = _doc_comment(node, content)
	grouped = _is_grouped(node)
	specs = _specs(node, "type_spec") + _specs(node, "type_alias")
	specs.sort(key=lambda n: n.start_byte)

	types: list[TypeDoc] = []
	for spec in specs:
		spec_text = _text(spec, content)
		doc = _doc_comment(spec, content) if grouped else decl_doc
		if not doc and len(specs) == 1:
			doc = decl_doc
		types.append(
			TypeDoc(
				name=_text(spec.child_by_field_name("name"), content),
				doc=doc,
				spec=spec_text,
				source=_text(node, content) if not grouped else f"type {spec_text}",
				pos=base + spec.start_byte,
			)
		)
	return types


def _read_values(node: Node, content: bytes, base: int) -> ValueGroup:
	kind = "const" if node.type == "const_declaration" else "var"
	names: list[str] = []
	spec_types: list[str] = []
	previous_type = ""
	for spec in _specs(node, f"{kind}_spec"):
		names.extend(_text(n, content) for n in _names(spec))
		spec_type = _text(spec.child_by_field_name("type"), content)
		has_value = spec.child_by_field_name("value") is not None
		# Constants without type or value repeat the previous spec
		if kind == "const" and not spec_type and not has_value:
			spec_type = previous_type
		previous_type = spec_type
		spec_types.append(spec_type)

	value = Value(names=names, doc=_doc_comment(node, content), decl=_text(node, content), pos=base + node.start_byte)
	return ValueGroup(kind=kind, value=value, spec_types=spec_types)


def _read_imports(node: Node, content: bytes) -> list[str]:
	paths: list[str] = []
	stack = list(node.named_children)
	while stack:
		child = stack.pop(0)
		if child.type == "import_spec":
			paths.append(_text(child.child_by_field_name("path"), content).strip('"`'))
		elif child.type == "import_spec_list":
			stack.extend(child.named_children)
	return paths


# --- Examples --- #


def split_example_name(func_name: str) -> tuple[str, str] | None:
	"""
	Split an example function name into its target and suffix.

	``Example`` -> ``("", "")``, ``ExampleT_M_big`` -> ``("T_M", "big")``.
	Returns None when the function is not an example.

	"""
	if not func_name.startswith("Example"):
		return None
	rest = func_name[len("Example") :]
	if rest and not (rest[0] == "_" or rest[0].isupper()):
		return None
	suffix = ""
	index = rest.rfind("_")
	if index >= 0 and index + 1 < len(rest) and rest[index + 1].islower():
		suffix = rest[index + 1 :]
		rest = rest[:index]
	return rest, suffix


def _example_body(body: str) -> tuple[str, str]:
	"""Split an example body into code and expected output."""
	lines = body.strip()[1:-1].splitlines()

	output_at = -1
	for index in range(len(lines) - 1, -1, -1):
		stripped = lines[index].strip()
		if not stripped:
			continue
		if not stripped.startswith("//"):
			break
		if _OUTPUT_RE.match(stripped):
			output_at = index
			break

	output = ""
	if output_at >= 0:
		first = _OUTPUT_RE.match(lines[output_at].strip())
		output_lines = [first.group(2).strip()] if first and first.group(2).strip() else []
		for line in lines[output_at + 1 :]:
			stripped = line.strip()
			if stripped.startswith("//"):
				stripped = stripped[2:]
				output_lines.append(stripped[1:] if stripped.startswith(" ") else stripped)
		output = "\n".join(output_lines).strip("\n")
		lines = lines[:output_at]

	code = textwrap.dedent("\n".join(lines)).strip("\n")
	return code, output


def _read_example(node: Node, content: bytes, base: int) -> tuple[str, Example] | None:
	name = _text(node.child_by_field_name("name"), content)
	parts = split_example_name(name)
	if parts is None:
		return None
	if _text(node.child_by_field_name("parameters"), content).strip() != "()":
		return None
	if node.child_by_field_name("result") is not None or node.child_by_field_name("body") is None:
		return None
	target, suffix = parts
	code, output = _example_body(_text(node.child_by_field_name("body"), content))
	example = Example(suffix=suffix, doc=_doc_comment(node, content), code=code, output=output, pos=base + node.start_byte)
	return target, example


# --- Files --- #


def is_build_ignored(content: bytes) -> bool:
	"""Report whether a file opts out of every build with an ``ignore`` constraint."""
	clause = _PACKAGE_CLAUSE_RE.search(content)
	header = content[: clause.start()] if clause else content
	return bool(_BUILD_IGNORE_RE.search(header))


def parse_file(path: Path, fileset: FileSet, *, examples_only: bool = False) -> ParsedFile | None:
	"""
	Parse one Go source file.

	Args:
	    path: File to parse
	    fileset: File set that assigns positions to this file
	    examples_only: Only collect ``Example`` functions (used for _test.go files)

	Returns:
	    The extracted declarations, or None when the file is excluded by a
	    build constraint or has no package clause

	Raises:
	    ParseError: If the file contains syntax errors
	    OSError: If the file cannot be read

	"""
	content = path.read_bytes()
	if is_build_ignored(content):
		logger.debug("Skipping %s: excluded by build constraint", path)
		return None

	base = fileset.add_file(str(path), content)
	tree = get_parser(GO_LANGUAGE).parse(content)
	root = tree.root_node

	if root.has_error:
		error = _first_error(root)
		line = error.start_point[0] + 1 if error is not None else 0
		raise ParseError(str(path), "syntax error", line)

	parsed = ParsedFile(name=path.name)
	for node in root.named_children:
		if node.type == "package_clause":
			ident = next((c for c in node.named_children if c.type == "package_identifier"), None)
			parsed.package = _text(ident, content)
			parsed.doc = _doc_comment(node, content)
		elif examples_only:
			if node.type == "function_declaration":
				example = _read_example(node, content, base)
				if example is not None:
					parsed.examples.append(example)
		elif node.type == "import_declaration":
			parsed.imports.extend(_read_imports(node, content))
		elif node.type in ("function_declaration", "method_declaration"):
			parsed.funcs.append(_read_func(node, content, base))
		elif node.type == "type_declaration":
			parsed.types.extend(_read_types(node, content, base))
		elif node.type in ("const_declaration", "var_declaration"):
			parsed.values.append(_read_values(node, content, base))

	if not parsed.package:
		logger.debug("Skipping %s: no package clause", path)
		return None

	logger.debug(
		"Parsed %s: %d funcs, %d types, %d value groups, %d examples",
		path,
		len(parsed.funcs),
		len(parsed.types),
		len(parsed.values),
		len(parsed.examples),
	)
	return parsed
