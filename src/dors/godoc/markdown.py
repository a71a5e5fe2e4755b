"""Convert Go doc comment text into Markdown."""

from __future__ import annotations

import re
from dataclasses import dataclass

_LIST_RE = re.compile(r"^[ \t]*([-*+•]|\d+[.)])[ \t]+(.*)$")
_HEADING_RE = re.compile(r"^#[ \t]+(\S.*)$")
_MD_SPECIAL_RE = re.compile(r"([\\`*_])")
# URLs and [Name] doc links are kept out of escaping
_TOKEN_RE = re.compile(r"(?P<url>https?://[^\s<>()]+)|\[(?P<link>\*?[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*)\]")


@dataclass(frozen=True)
class MarkdownOptions:
	"""Options for doc comment conversion."""

	heading_level: int = 3
	code_language: str = "go"
	doc_links: bool = True


def _is_old_heading(lines: list[str], index: int) -> bool:
	"""
	Detect a pre-Go 1.19 implicit heading.

	A heading is a single capitalized line without terminal punctuation that
	is surrounded by blank lines and followed by a paragraph.

	"""
	line = lines[index]
	if not line or not line[0].isupper():
		return False
	if line[-1] in ".,:;!?)" or "  " in line:
		return False
	before_blank = index == 0 or not lines[index - 1].strip()
	after_blank = index + 1 < len(lines) and not lines[index + 1].strip()
	followed = index + 2 < len(lines) and bool(lines[index + 2].strip()) and lines[index + 2][0] not in " \t"
	return index > 0 and before_blank and after_blank and followed


def _inline(text: str, options: MarkdownOptions) -> str:
	"""Render paragraph text: escape Markdown, keep URLs and doc links."""
	rendered: list[str] = []
	last = 0
	for match in _TOKEN_RE.finditer(text):
		rendered.append(_MD_SPECIAL_RE.sub(r"\\\1", text[last : match.start()]))
		if match.group("url"):
			rendered.append(match.group("url"))
		elif options.doc_links:
			rendered.append(f"`{match.group('link')}`")
		else:
			rendered.append(_MD_SPECIAL_RE.sub(r"\\\1", match.group(0)))
		last = match.end()
	rendered.append(_MD_SPECIAL_RE.sub(r"\\\1", text[last:]))
	return "".join(rendered)


def to_markdown(text: str, options: MarkdownOptions | None = None) -> str:
	"""
	Convert doc comment text into Markdown.

	Supports paragraphs, ``# Heading`` lines and implicit headings, lists,
	and indented code blocks, which become fenced blocks.

	Args:
	    text: Doc comment text as produced by the extractor
	    options: Conversion options

	Returns:
	    Markdown text ending in a newline, or an empty string for empty input

	"""
	options = options or MarkdownOptions()
	lines = text.splitlines()
	out: list[str] = []
	paragraph: list[str] = []
	hashes = "#" * max(1, min(options.heading_level, 6))

	def flush() -> None:
		if paragraph:
			out.append(_inline(" ".join(p.strip() for p in paragraph), options))
			out.append("")
			paragraph.clear()

	index = 0
	while index < len(lines):
		line = lines[index]
		stripped = line.strip()

		if not stripped:
			flush()
			index += 1
			continue

		if line[0] in " \t":
			list_match = _LIST_RE.match(line)
			if list_match and not paragraph:
				flush()
				while index < len(lines) and lines[index].strip():
					item = _LIST_RE.match(lines[index])
					if item:
						marker = "1." if item.group(1)[0].isdigit() else "-"
						out.append(f"{marker} {_inline(item.group(2).strip(), options)}")
					elif out:
						out[-1] += " " + _inline(lines[index].strip(), options)
					index += 1
				out.append("")
				continue

			flush()
			block: list[str] = []
			while index < len(lines) and (not lines[index].strip() or lines[index][0] in " \t"):
				block.append(lines[index])
				index += 1
			while block and not block[-1].strip():
				block.pop()
			indent = min(len(b) - len(b.lstrip()) for b in block if b.strip())
			out.append(f"```{options.code_language}")
			out.extend(b[indent:] for b in block)
			out.append("```")
			out.append("")
			continue

		heading = _HEADING_RE.match(line)
		if heading and not paragraph:
			out.append(f"{hashes} {heading.group(1).strip()}")
			out.append("")
			index += 1
			continue

		if not paragraph and _is_old_heading(lines, index):
			out.append(f"{hashes} {stripped}")
			out.append("")
			index += 1
			continue

		paragraph.append(line)
		index += 1

	flush()
	while out and not out[-1]:
		out.pop()
	return "\n".join(out) + "\n" if out else ""
