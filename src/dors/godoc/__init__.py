"""
Go documentation extraction for Dors.

This package parses Go source with Tree-sitter and builds the documentation
model rendered by the generator.

"""

from .extract import ParseError
from .fileset import NO_POS, FileSet, Position
from .markdown import MarkdownOptions, to_markdown
from .model import Example, Func, Package, TypeDoc, Value
from .package import find_module, parse_dir

__all__ = [
	"NO_POS",
	"Example",
	"FileSet",
	"Func",
	"MarkdownOptions",
	"Package",
	"ParseError",
	"Position",
	"TypeDoc",
	"Value",
	"find_module",
	"parse_dir",
	"to_markdown",
]
