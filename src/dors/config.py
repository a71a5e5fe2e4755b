"""Default configuration settings for the dors tool."""

# Source files considered by the generator
SOURCE_SUFFIX = ".go"
TEST_SUFFIX = "_test.go"

# Name of every generated document
DOC_FILENAME = "DOCS.md"

# Documentation sections, in rendering order
SECTIONS = (
	"constants",
	"variables",
	"functions",
	"types",
	"factories",
	"methods",
)

DEFAULT_CONFIG = {
	# Gen command configuration
	"gen": {
		# Title for the documentation, empty means the package name is used
		"title": "",
		# Sections to render, empty means all sections
		"include_sections": list(SECTIONS),
		# Directories (relative to the root) skipped with their subtrees
		"exclude_paths": [],
		# Walk sub-directories of the root
		"recursive": True,
		# Match exclude paths case-sensitively
		"respect_case": True,
		# One-line representation for each symbol
		"short": False,
		# Print the full source of each symbol instead of its signature
		"print_source": False,
		# Include unexported symbols
		"unexported": False,
		# Omit the sub packages section
		"skip_sub_pkgs": False,
		# Omit examples
		"skip_examples": False,
	},
	# Processing configuration
	"processing": {
		# Concurrent package loads, null lets the executor decide
		"max_workers": None,
		# Concurrent document renders, bounds the number of open files
		"max_open_files": 10,
	},
}
