"""Models for the documentation generation module."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dors.config import DEFAULT_CONFIG, SECTIONS
from dors.godoc import FileSet, Package
from dors.utils.file_filters import normalize_exclude_paths

from .errors import DorsError


class RenderConfig(BaseModel):
	"""Immutable settings shared by every collection and rendering call."""

	model_config = ConfigDict(frozen=True)

	title: str = ""
	include_sections: frozenset[str] = Field(default=frozenset(SECTIONS))
	exclude_paths: frozenset[str] = Field(default=frozenset())
	recursive: bool = True
	respect_case: bool = True
	verbose: bool = False
	short: bool = False
	print_source: bool = False
	unexported: bool = False
	skip_sub_pkgs: bool = False
	skip_examples: bool = False

	@field_validator("include_sections", mode="before")
	@classmethod
	def _check_sections(cls, value: Any) -> frozenset[str]:  # noqa: ANN401
		if value is None:
			return frozenset(SECTIONS)
		if isinstance(value, str):
			value = [value]
		sections = {str(section).strip().lower() for section in value if str(section).strip()}
		if not sections:
			return frozenset(SECTIONS)
		unknown = sorted(sections.difference(SECTIONS))
		if unknown:
			msg = f"unknown sections {', '.join(unknown)}; available: {', '.join(SECTIONS)}"
			raise ValueError(msg)
		return frozenset(sections)

	@field_validator("exclude_paths", mode="before")
	@classmethod
	def _normalize_excludes(cls, value: Any) -> frozenset[str]:  # noqa: ANN401
		if value is None:
			return frozenset()
		if isinstance(value, str):
			value = [value]
		return normalize_exclude_paths(str(v) for v in value)

	def has_section(self, section: str) -> bool:
		"""Return True when a section is rendered."""
		return section in self.include_sections

	@classmethod
	def from_config(cls, gen_config: dict[str, Any], **overrides: Any) -> RenderConfig:  # noqa: ANN401
		"""
		Build a render config from the ``gen`` section of the loaded configuration.

		Args:
		    gen_config: The ``gen`` configuration section
		    **overrides: Values that take precedence, ``None`` values are ignored

		Returns:
		    The validated configuration

		"""
		data = {key: value for key, value in gen_config.items() if key in cls.model_fields}
		data.update({key: value for key, value in overrides.items() if value is not None})
		return cls.model_validate(data)


class ProcessingConfig(BaseModel):
	"""Worker pool sizes from the ``processing`` configuration section."""

	model_config = ConfigDict(frozen=True)

	max_workers: int | None = Field(default=DEFAULT_CONFIG["processing"]["max_workers"], ge=1)
	max_open_files: int = Field(default=DEFAULT_CONFIG["processing"]["max_open_files"], ge=1)

	@classmethod
	def from_config(cls, processing_config: dict[str, Any]) -> ProcessingConfig:
		"""Validate the known keys of the ``processing`` section."""
		data = {key: value for key, value in processing_config.items() if key in cls.model_fields}
		return cls.model_validate(data)


@dataclass
class PackageNode:
	"""Documentation of one directory of the tree."""

	template_name: ClassVar[str] = "package.md.j2"

	path: str
	doc_model: Package
	position_index: FileSet = field(default_factory=FileSet)
	module_name: str = ""
	children: list[PackageNode] = field(default_factory=list)

	@property
	def has_source(self) -> bool:
		"""Whether the node has source files and therefore its own document."""
		return bool(self.doc_model.filenames)

	def walk(self) -> Iterator[PackageNode]:
		"""Yield this node and its descendants in pre-order."""
		yield self
		for child in self.children:
			yield from child.walk()


@dataclass(frozen=True)
class SummaryNode:
	"""Synthetic node for the root overview listing sub-packages."""

	template_name: ClassVar[str] = "summary.md.j2"

	packages: tuple[PackageNode, ...]
	title: str = ""


RenderTarget = PackageNode | SummaryNode


def iter_nodes(nodes: list[PackageNode]) -> Iterator[PackageNode]:
	"""Yield every node of a forest in pre-order."""
	for node in nodes:
		yield from node.walk()


@dataclass
class CollectResult:
	"""Outcome of a collection run."""

	nodes: list[PackageNode] = field(default_factory=list)
	errors: list[DorsError] = field(default_factory=list)


@dataclass
class WriteReport:
	"""Outcome of writing documents."""

	written: list[str] = field(default_factory=list)
	failures: list[tuple[str, Exception]] = field(default_factory=list)
	summary_path: str | None = None

	@property
	def written_count(self) -> int:
		"""Number of documents written, the summary included."""
		return len(self.written)


@dataclass
class GenReport:
	"""Outcome of a complete generation run."""

	load_errors: list[DorsError] = field(default_factory=list)
	write: WriteReport = field(default_factory=WriteReport)
	package_count: int = 0
	elapsed: float = 0.0

	@property
	def failures(self) -> list[tuple[str, Exception]]:
		"""Every failed directory or document with its relative path."""
		failed: list[tuple[str, Exception]] = [(getattr(e, "path", ""), e) for e in self.load_errors]
		failed.extend(self.write.failures)
		return sorted(failed, key=lambda failure: failure[0])

	@property
	def ok(self) -> bool:
		"""Whether the run finished without failures."""
		return not self.load_errors and not self.write.failures
