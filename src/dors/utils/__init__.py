"""Utility module for Dors package."""

from .cli_utils import console, progress_indicator
from .file_filters import is_excluded, is_source_file, list_source_files
from .path_utils import link_between, relative_slash_path

__all__ = [
	"console",
	"is_excluded",
	"is_source_file",
	"link_between",
	"list_source_files",
	"progress_indicator",
	"relative_slash_path",
]
