"""Functions exposed to the documentation templates."""

from __future__ import annotations

import re
from functools import partial
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any

from dors.config import DOC_FILENAME
from dors.godoc import FileSet, MarkdownOptions, to_markdown
from dors.utils.path_utils import link_between

if TYPE_CHECKING:
	from collections.abc import Callable

	from dors.gen.models import PackageNode, RenderConfig
	from dors.godoc import Func, Package

_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_END_RE = re.compile(r"[.!?](\s|$)")
ELLIPSIS = "{ ... }"


# --- Code formatting --- #


def code(text: str) -> str:
	"""Wrap text in a plain fenced code block."""
	if not text.endswith("\n"):
		text += "\n"
	return f"```\n{text}```\n"


def gocode(text: str) -> str:
	"""Wrap text in a Go fenced code block."""
	return f"```go\n{text.rstrip(chr(10))}\n```\n"


def inline_code(text: str) -> str:
	"""Wrap text as inline code."""
	return f"`{text}`"


def collapse_braces(text: str) -> str:
	"""
	Replace every outermost balanced ``{...}`` span with ``{ ... }``.

	An unbalanced opening brace collapses everything up to the end of the text.

	"""
	out: list[str] = []
	depth = 0
	for char in text:
		if char == "{":
			if depth == 0:
				out.append(ELLIPSIS)
			depth += 1
		elif char == "}" and depth > 0:
			depth -= 1
		elif depth == 0:
			out.append(char)
	return "".join(out)


def inline_code_ellipsis(text: str) -> str:
	"""Inline code with bodies collapsed."""
	return inline_code(collapse_braces(text))


def gocode_ellipsis(text: str) -> str:
	"""Go code block with bodies collapsed."""
	return gocode(collapse_braces(text))


# --- Declarations --- #


def one_line(text: str) -> str:
	"""Normalize source text to a single line."""
	line = _WHITESPACE_RE.sub(" ", text).strip()
	line = line.replace("( ", "(").replace(" )", ")").replace("[ ", "[").replace(" ]", "]")
	return line.replace(",)", ")").replace(",]", "]")


def func_signature(func: Func) -> str:
	"""
	Format a function or method signature on one line.

	Methods get their receiver clause back: ``(b *Buffer)``, ``(b Buffer)``,
	or ``(Buffer)`` for anonymous receivers.

	"""
	parts = ["func "]
	if func.is_method:
		receiver = f"{func.recv_name} {func.recv}" if func.recv_name else func.recv
		parts.append(f"({receiver}) ")
	parts.append(func.name)
	parts.append(func.type_params)
	parts.append(func.params)
	if func.results:
		parts.append(" " + func.results)
	return one_line("".join(parts))


def decl(keyword: str, spec: str) -> str:
	"""Format a declaration keyword and a single spec as source text."""
	return f"{keyword} {spec}"


def synopsis(text: str) -> str:
	"""Return the first sentence of a doc comment on one line."""
	paragraph = text.strip().split("\n\n", 1)[0]
	line = _WHITESPACE_RE.sub(" ", paragraph).strip()
	match = _SENTENCE_END_RE.search(line)
	return line[: match.start() + 1] if match else line


def full_name(package: Package) -> str:
	"""Import path without a leading ``github.com/``."""
	return package.import_path.removeprefix("github.com/")


# --- Positions --- #


def filename(fileset: FileSet, pos: int) -> str:
	"""Base name of the file holding a position."""
	position = fileset.position(pos)
	return PurePosixPath(position.filename.replace("\\", "/")).name if position.is_valid() else ""


def line_number(fileset: FileSet, pos: int) -> int:
	"""1-based line of a position, 0 when unknown."""
	return fileset.position(pos).line


# --- Links --- #


def doc_link(from_path: str, to_path: str) -> str:
	"""Link from the document of one tree directory to the document of another."""
	return f"{link_between(from_path, to_path)}/{DOC_FILENAME}"


def sub_path(parent: str, child: str) -> str:
	"""Path of a descendant directory relative to its ancestor."""
	return child[len(parent) + 1 :] if parent else child


def sub_packages(node: PackageNode) -> list[PackageNode]:
	"""
	Nearest documented descendants of a node.

	Children without a package of their own are looked through, so their
	documented descendants are still listed by the parent.

	"""
	found: list[PackageNode] = []
	for child in node.children:
		if child.has_source:
			found.append(child)
		else:
			found.extend(sub_packages(child))
	return found


def local_imports(node: PackageNode) -> list[tuple[str, str]]:
	"""
	List the imports of a node that live in the same module.

	Returns:
	    (import path, link to its document) pairs

	"""
	module = node.module_name
	own = node.doc_model.import_path
	if not module or not own:
		return []
	own_rel = own.removeprefix(module).lstrip("/")
	links: list[tuple[str, str]] = []
	for imported in node.doc_model.imports:
		if imported == module or imported.startswith(module + "/"):
			target_rel = imported.removeprefix(module).lstrip("/")
			links.append((imported, doc_link(own_rel, target_rel)))
	return links


def template_functions(
	config: RenderConfig,
	fileset: FileSet | None = None,
	options: MarkdownOptions | None = None,
) -> dict[str, Callable[..., Any]]:
	"""
	Build the function table for one render call.

	Args:
	    config: Render configuration, available to templates as ``config()``
	    fileset: Position index of the rendered package
	    options: Doc comment conversion options

	Returns:
	    Mapping of template function names to callables

	"""
	fileset = fileset or FileSet()
	return {
		"config": lambda: config,
		"doc": partial(_doc, options=options),
		"has_section": config.has_section,
		"code": code,
		"gocode": gocode,
		"inline_code": inline_code,
		"inline_code_ellipsis": inline_code_ellipsis,
		"gocode_ellipsis": gocode_ellipsis,
		"func_signature": func_signature,
		"decl": decl,
		"synopsis": synopsis,
		"full_name": full_name,
		"import_path": lambda package: package.import_path,
		"filename": partial(filename, fileset),
		"line_number": partial(line_number, fileset),
		"doc_link": doc_link,
		"sub_path": sub_path,
		"sub_packages": sub_packages,
		"local_imports": local_imports,
	}


def _doc(text: str, options: MarkdownOptions | None = None) -> str:
	return to_markdown(text, options)
