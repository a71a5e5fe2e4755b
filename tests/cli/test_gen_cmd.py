"""Tests for the gen command CLI."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from dors import __version__
from dors.cli import app
from dors.cli.gen_cmd import split_values
from tests.base import CLITestBase


@pytest.mark.unit
def test_split_values() -> None:
	"""Test repeated and comma separated values are flattened."""
	assert split_values(None) is None
	assert split_values(["types,functions", " methods ", ","]) == ["types", "functions", "methods"]


@pytest.mark.cli
@pytest.mark.fs
class TestGenCommand(CLITestBase):
	"""Test cases for the 'gen' CLI command."""

	runner: CliRunner

	@pytest.fixture(autouse=True)
	def setup_cli(self, isolate_environment: None) -> None:
		"""Set up the CLI runner."""
		self.runner = CliRunner()

	def test_version(self) -> None:
		"""Test the version option."""
		result = self.runner.invoke(app, ["--version"])

		assert result.exit_code == 0
		assert f"Dors version: {__version__}" in result.output

	@patch("dors.cli.gen_cmd._gen_command_impl")
	def test_gen_command_defaults(self, mock_gen_command_impl: MagicMock) -> None:
		"""Test 'gen' leaves every option unset by default."""
		result = self.runner.invoke(app, ["gen", str(self.temp_dir)])

		assert result.exit_code == 0
		mock_gen_command_impl.assert_called_once()
		_, kwargs = mock_gen_command_impl.call_args
		assert kwargs["path"] == self.temp_dir
		assert kwargs["title"] is None
		assert kwargs["include_sections"] is None
		assert kwargs["recursive"] is None
		assert kwargs["short"] is None
		assert kwargs["config"] is None
		assert kwargs["verbose"] is False

	@patch("dors.cli.gen_cmd._gen_command_impl")
	def test_global_verbose(self, mock_gen_command_impl: MagicMock) -> None:
		"""Test the global verbose flag reaches the command."""
		result = self.runner.invoke(app, ["--verbose", "gen", str(self.temp_dir)])

		assert result.exit_code == 0
		_, kwargs = mock_gen_command_impl.call_args
		assert kwargs["verbose"] is True

	@patch("dors.cli.gen_cmd._gen_command_impl")
	def test_gen_command_options(self, mock_gen_command_impl: MagicMock) -> None:
		"""Test options are passed through to the implementation."""
		result = self.runner.invoke(
			app,
			[
				"gen",
				str(self.temp_dir),
				"-t",
				"Geometry",
				"-i",
				"types,functions",
				"-e",
				"vendor",
				"--no-recursive",
				"--ignore-case",
				"-s",
				"-p",
				"-u",
				"-k",
				"-x",
			],
		)

		assert result.exit_code == 0
		_, kwargs = mock_gen_command_impl.call_args
		assert kwargs["title"] == "Geometry"
		assert kwargs["include_sections"] == ["types,functions"]
		assert kwargs["exclude_paths"] == ["vendor"]
		assert kwargs["recursive"] is False
		assert kwargs["respect_case"] is False
		assert kwargs["short"] is True
		assert kwargs["print_source"] is True
		assert kwargs["unexported"] is True
		assert kwargs["skip_sub_pkgs"] is True
		assert kwargs["skip_examples"] is True

	def test_generates_documents(self) -> None:
		"""Test a clean run writes documents and exits with 0."""
		self.create_package("a")
		self.create_package("a/b", "b")

		result = self.runner.invoke(app, ["gen", str(self.temp_dir)])

		assert result.exit_code == 0, result.output
		assert (self.temp_dir / "a" / "DOCS.md").read_text().startswith("# a\n")
		assert (self.temp_dir / "a" / "b" / "DOCS.md").exists()

	def test_defaults_to_current_directory(self) -> None:
		"""Test the root argument defaults to the working directory."""
		self.create_package("", "geo")

		result = self.runner.invoke(app, ["gen"])

		assert result.exit_code == 0, result.output
		assert (self.temp_dir / "DOCS.md").read_text().startswith("# geo\n")

	def test_failed_package_exit_code(self) -> None:
		"""Test a failing directory yields exit code 1 while others are written."""
		self.create_package("good")
		self.create_test_file("bad/one.go", "package one\n")
		self.create_test_file("bad/two.go", "package two\n")

		result = self.runner.invoke(app, ["gen", str(self.temp_dir)])

		assert result.exit_code == 1
		assert (self.temp_dir / "good" / "DOCS.md").exists()

	def test_missing_root(self) -> None:
		"""Test a missing root directory is fatal."""
		result = self.runner.invoke(app, ["gen", str(self.temp_dir / "missing")])

		assert result.exit_code == 2

	def test_unknown_section(self) -> None:
		"""Test an unknown section name is rejected before the run."""
		self.create_package("a")

		result = self.runner.invoke(app, ["gen", str(self.temp_dir), "-i", "widgets"])

		assert result.exit_code == 2
		assert not (self.temp_dir / "a" / "DOCS.md").exists()

	def test_missing_config_file(self) -> None:
		"""Test an explicit config file that does not exist is fatal."""
		result = self.runner.invoke(app, ["gen", str(self.temp_dir), "-c", str(self.temp_dir / "nope.yml")])

		assert result.exit_code == 2

	def test_malformed_config_file(self) -> None:
		"""Test a config file that is not a mapping is fatal."""
		self.create_test_file(".dors.yml", "- just\n- a list\n")

		result = self.runner.invoke(app, ["gen", str(self.temp_dir)])

		assert result.exit_code == 2

	def test_invalid_processing_config(self) -> None:
		"""Test a worker count below one is rejected before the run."""
		self.create_package("a")
		self.create_test_file(
			".dors.yml",
			"""
			processing:
			  max_workers: 0
			""",
		)

		result = self.runner.invoke(app, ["gen", str(self.temp_dir)])

		assert result.exit_code == 2
		assert not (self.temp_dir / "a" / "DOCS.md").exists()

	def test_config_file_applies(self) -> None:
		"""Test settings from .dors.yml reach the renderer."""
		self.create_package("a")
		self.create_test_file(
			".dors.yml",
			"""
			gen:
			  title: From Config
			""",
		)

		result = self.runner.invoke(app, ["gen", str(self.temp_dir)])

		assert result.exit_code == 0, result.output
		assert (self.temp_dir / "a" / "DOCS.md").read_text().startswith("# From Config\n")

	def test_flag_overrides_config_file(self) -> None:
		"""Test command line options win over the config file."""
		self.create_package("a")
		self.create_test_file(
			".dors.yml",
			"""
			gen:
			  title: From Config
			""",
		)

		result = self.runner.invoke(app, ["gen", str(self.temp_dir), "--title", "From Flag"])

		assert result.exit_code == 0, result.output
		assert (self.temp_dir / "a" / "DOCS.md").read_text().startswith("# From Flag\n")

	def test_excluded_paths(self) -> None:
		"""Test excluded directories are not documented."""
		self.create_package("a")
		self.create_package("a/vendor/x", "x")

		result = self.runner.invoke(app, ["gen", str(self.temp_dir), "-e", "a/vendor"])

		assert result.exit_code == 0, result.output
		assert (self.temp_dir / "a" / "DOCS.md").exists()
		assert not (self.temp_dir / "a" / "vendor" / "x" / "DOCS.md").exists()
