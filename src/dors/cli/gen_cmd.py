"""Implementation of the gen command for package documentation generation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer

logger = logging.getLogger(__name__)

# Exit code for runs that could not start or were aborted
FATAL_EXIT_CODE = 2

# Command line argument annotations
PathArg = Annotated[
	Path,
	typer.Argument(
		help="Root directory of the Go package tree",
		show_default=True,
	),
]

TitleOpt = Annotated[
	str | None,
	typer.Option("--title", "-t", help="Title overriding the package name of every document"),
]

IncludeSectionsOpt = Annotated[
	list[str] | None,
	typer.Option(
		"--include-sections",
		"-i",
		help="Sections to render (constants, variables, functions, types, factories, methods). "
		"Repeat the option or separate values with commas.",
	),
]

ExcludePathsOpt = Annotated[
	list[str] | None,
	typer.Option(
		"--exclude-paths",
		"-e",
		help="Directories, relative to the root, skipped with their subtrees. "
		"Repeat the option or separate values with commas.",
	),
]

RecursiveFlag = Annotated[
	bool | None,
	typer.Option("--recursive/--no-recursive", help="Walk sub-directories of the root"),
]

RespectCaseFlag = Annotated[
	bool | None,
	typer.Option("--respect-case/--ignore-case", help="Match exclude paths case-sensitively"),
]

ShortFlag = Annotated[
	bool | None,
	typer.Option("--short", "-s", help="One-line representation for each symbol"),
]

PrintSourceFlag = Annotated[
	bool | None,
	typer.Option("--print-source", "-p", help="Print the full source of each symbol"),
]

UnexportedFlag = Annotated[
	bool | None,
	typer.Option("--unexported", "-u", help="Include unexported symbols"),
]

SkipSubPkgsFlag = Annotated[
	bool | None,
	typer.Option("--skip-sub-pkgs", "-k", help="Omit the sub packages section"),
]

SkipExamplesFlag = Annotated[
	bool | None,
	typer.Option("--skip-examples", "-x", help="Omit examples"),
]

ConfigOpt = Annotated[
	Path | None,
	typer.Option("--config", "-c", help="Path to config file"),
]


def split_values(values: list[str] | None) -> list[str] | None:
	"""Flatten repeated and comma separated option values."""
	if values is None:
		return None
	return [part.strip() for value in values for part in value.split(",") if part.strip()]


def register_command(app: typer.Typer) -> None:
	"""Register the gen command with the CLI app."""

	@app.command(name="gen")
	def gen_command(
		ctx: typer.Context,
		path: PathArg = Path(),
		title: TitleOpt = None,
		include_sections: IncludeSectionsOpt = None,
		exclude_paths: ExcludePathsOpt = None,
		recursive: RecursiveFlag = None,
		respect_case: RespectCaseFlag = None,
		short: ShortFlag = None,
		print_source: PrintSourceFlag = None,
		unexported: UnexportedFlag = None,
		skip_sub_pkgs: SkipSubPkgsFlag = None,
		skip_examples: SkipExamplesFlag = None,
		config: ConfigOpt = None,
	) -> None:
		"""
		Generate a DOCS.md file for every Go package below a directory.

		Examples:
		        dors gen                          # Document the current directory tree
		        dors gen ./pkg -e vendor          # Skip the vendor subtree
		        dors gen -i functions -i types    # Only render functions and types

		"""
		_gen_command_impl(
			path=path,
			title=title,
			include_sections=include_sections,
			exclude_paths=exclude_paths,
			recursive=recursive,
			respect_case=respect_case,
			short=short,
			print_source=print_source,
			unexported=unexported,
			skip_sub_pkgs=skip_sub_pkgs,
			skip_examples=skip_examples,
			config=config,
			verbose=ctx.meta.get("is_verbose", False),
		)


def _gen_command_impl(
	path: Path,
	title: str | None = None,
	include_sections: list[str] | None = None,
	exclude_paths: list[str] | None = None,
	recursive: bool | None = None,
	respect_case: bool | None = None,
	short: bool | None = None,
	print_source: bool | None = None,
	unexported: bool | None = None,
	skip_sub_pkgs: bool | None = None,
	skip_examples: bool | None = None,
	config: Path | None = None,
	verbose: bool = False,
) -> None:
	"""Actual implementation of the gen command."""
	from pydantic import ValidationError

	from dors.gen.command import GenCommand
	from dors.gen.errors import FatalError
	from dors.gen.models import ProcessingConfig, RenderConfig
	from dors.utils.cli_utils import exit_with_error, handle_keyboard_interrupt
	from dors.utils.config_loader import ConfigError, ConfigLoader

	target_path = path.resolve()
	if not target_path.is_dir():
		exit_with_error(f"Not a directory: {target_path}", exit_code=FATAL_EXIT_CODE)

	try:
		config_loader = ConfigLoader(str(config) if config else None, repo_root=target_path)
		render_config = RenderConfig.from_config(
			config_loader.get_section("gen"),
			title=title,
			include_sections=split_values(include_sections),
			exclude_paths=split_values(exclude_paths),
			recursive=recursive,
			respect_case=respect_case,
			short=short,
			print_source=print_source,
			unexported=unexported,
			skip_sub_pkgs=skip_sub_pkgs,
			skip_examples=skip_examples,
			verbose=verbose or None,
		)
		processing = ProcessingConfig.from_config(config_loader.get_section("processing"))
	except ConfigError as e:
		exit_with_error(f"Configuration error: {e!s}", exit_code=FATAL_EXIT_CODE, exception=e)
	except ValidationError as e:
		exit_with_error(f"Invalid options: {e!s}", exit_code=FATAL_EXIT_CODE, exception=e)

	command = GenCommand(
		render_config,
		max_workers=processing.max_workers,
		max_open_files=processing.max_open_files,
	)

	try:
		success = command.execute(target_path)
	except FatalError as e:
		exit_with_error(f"Generation failed: {e!s}", exit_code=FATAL_EXIT_CODE, exception=e)
	except KeyboardInterrupt:
		handle_keyboard_interrupt()

	if not success:
		raise typer.Exit(1)
