"""
Configuration loader for Dors.

This module provides functionality for loading and managing
configuration settings.

"""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any, TypeVar, cast

import yaml
from xdg.BaseDirectory import xdg_config_home

from dors.config import DEFAULT_CONFIG

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Minimum number of parts in an override variable: section and key
MIN_ENV_VAR_PARTS = 2
ENV_PREFIX = "DORS_"
LOCAL_CONFIG = ".dors.yml"


class ConfigError(Exception):
	"""Exception raised for configuration errors."""


def _parse_env_value(value: str, default: Any) -> Any:  # noqa: ANN401
	"""Convert an override string to the type of the default it replaces."""
	if isinstance(default, list):
		return [item.strip() for item in value.split(",") if item.strip()]
	lowered = value.lower()
	if isinstance(default, bool):
		return lowered in ("true", "yes", "1")
	if lowered in ("true", "yes"):
		return True
	if lowered in ("false", "no"):
		return False
	try:
		return int(value)
	except ValueError:
		pass
	try:
		return float(value)
	except ValueError:
		return value


class ConfigLoader:
	"""
	Loads and manages configuration for Dors.

	Defaults are overlaid with a YAML file and then with ``DORS_<SECTION>_<KEY>``
	environment variables.

	"""

	def __init__(self, config_file: str | None = None, repo_root: Path | None = None) -> None:
		"""
		Initialize the configuration loader.

		Args:
		        config_file: Path to configuration file (optional)
		        repo_root: Directory searched for ``.dors.yml``, defaults to the
		            current directory

		Raises:
		        ConfigError: If the configuration file cannot be loaded

		"""
		self.config: dict[str, Any] = {}
		self.repo_root = repo_root
		self.config_file = self._resolve_config_file(config_file)
		self.load_config()

	def _resolve_config_file(self, config_file: str | None = None) -> Path | None:
		"""
		Resolve the configuration file path.

		If a config file is specified, use that. Otherwise, look in standard locations:
		1. .dors.yml in the repository root (or current directory)
		2. $XDG_CONFIG_HOME/dors/config.yml

		Args:
		        config_file: Explicitly provided config file path (optional)

		Returns:
		        Resolved config file path or None if no suitable file found

		Raises:
		        ConfigError: If an explicitly specified file does not exist

		"""
		if config_file:
			path = Path(config_file).expanduser().resolve()
			if not path.is_file():
				msg = f"Configuration file not found: {path}"
				raise ConfigError(msg)
			return path

		local_config = (self.repo_root or Path()) / LOCAL_CONFIG
		if local_config.is_file():
			return local_config

		xdg_config_file = Path(xdg_config_home) / "dors" / "config.yml"
		if xdg_config_file.is_file():
			return xdg_config_file

		return None

	def load_config(self) -> dict[str, Any]:
		"""
		Load configuration from file and apply environment variable overrides.

		Returns:
		        Loaded configuration

		Raises:
		        ConfigError: If configuration file exists but cannot be loaded

		"""
		self.config = copy.deepcopy(DEFAULT_CONFIG)

		if self.config_file:
			try:
				with self.config_file.open(encoding="utf-8") as f:
					file_config = yaml.safe_load(f)
			except (OSError, yaml.YAMLError) as e:
				error_msg = f"Error loading configuration from {self.config_file}: {e}"
				logger.exception(error_msg)
				raise ConfigError(error_msg) from e

			if file_config is not None and not isinstance(file_config, dict):
				error_msg = f"Configuration in {self.config_file} must be a mapping"
				raise ConfigError(error_msg)
			if file_config:
				self._merge_configs(self.config, file_config)
			logger.info("Loaded configuration from %s", self.config_file)

		self._apply_env_overrides()
		return self.config

	def _merge_configs(self, base: dict[str, Any], override: dict[str, Any]) -> None:
		"""
		Recursively merge two configuration dictionaries.

		Args:
		        base: Base configuration dictionary to merge into
		        override: Override configuration to apply

		"""
		for key, value in override.items():
			if isinstance(value, dict) and key in base and isinstance(base[key], dict):
				self._merge_configs(base[key], value)
			else:
				base[key] = value

	def _apply_env_overrides(self) -> None:
		"""Apply environment variable overrides to configuration."""
		for env_var, value in os.environ.items():
			if not env_var.startswith(ENV_PREFIX):
				continue
			parts = env_var.lower().split("_")[1:]
			if len(parts) < MIN_ENV_VAR_PARTS:
				continue
			section, key = parts[0], "_".join(parts[1:])
			section_config = self.config.setdefault(section, {})
			if not isinstance(section_config, dict):
				continue
			typed_value = _parse_env_value(value, section_config.get(key))
			section_config[key] = typed_value
			logger.debug("Applied environment override %s: %s", env_var, typed_value)

	def get(self, key: str, default: T = None) -> T:
		"""
		Get a configuration value, optionally with a section.

		Args:
		        key: Configuration key, can include dots for nested access
		        default: Default value if key not found

		Returns:
		        Configuration value or default

		"""
		current: Any = self.config
		for part in key.split("."):
			if isinstance(current, dict) and part in current:
				current = current[part]
			else:
				return default
		return cast("T", current)

	def get_section(self, section: str) -> dict[str, Any]:
		"""Return a configuration section, empty when it is missing."""
		value = self.config.get(section)
		return value if isinstance(value, dict) else {}
