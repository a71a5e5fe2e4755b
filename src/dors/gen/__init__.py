"""
Package documentation generation for Dors.

This package walks a directory tree, loads the Go package of every eligible
directory and writes one Markdown document per package.

"""

from .collector import TreeCollector, link_tree
from .errors import CancelledError, DorsError, FatalError, NoPackageError, PackageLoadError, RenderError
from .loader import LoadedPackage, PackageLoader
from .models import CollectResult, GenReport, PackageNode, ProcessingConfig, RenderConfig, SummaryNode, WriteReport
from .transform import promote_examples, transform

__all__ = [
	"CancelledError",
	"CollectResult",
	"DorsError",
	"FatalError",
	"GenReport",
	"LoadedPackage",
	"NoPackageError",
	"PackageLoadError",
	"PackageLoader",
	"PackageNode",
	"ProcessingConfig",
	"RenderConfig",
	"RenderError",
	"SummaryNode",
	"TreeCollector",
	"WriteReport",
	"link_tree",
	"promote_examples",
	"transform",
]
