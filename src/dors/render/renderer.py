"""Render package documentation to Markdown with Jinja2 templates."""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING

from jinja2 import (
	BaseLoader,
	Environment,
	PackageLoader,
	StrictUndefined,
	TemplateError,
)

from dors.gen.errors import RenderError
from dors.gen.models import PackageNode, SummaryNode
from dors.godoc import MarkdownOptions

from .funcs import template_functions
from .newlines import MultiNewlineEliminator

if TYPE_CHECKING:
	from typing import TextIO

	from dors.gen.models import RenderConfig, RenderTarget

logger = logging.getLogger(__name__)

TEMPLATE_PACKAGE = "dors.render"
TEMPLATE_DIR = "templates"


def create_environment(loader: BaseLoader | None = None) -> Environment:
	"""
	Create the Jinja2 environment used for all documents.

	Args:
	    loader: Template loader, defaults to the templates shipped with dors

	Returns:
	    A configured environment

	"""
	return Environment(
		loader=loader or PackageLoader(TEMPLATE_PACKAGE, TEMPLATE_DIR),
		undefined=StrictUndefined,
		trim_blocks=True,
		lstrip_blocks=True,
		keep_trailing_newline=True,
		autoescape=False,  # noqa: S701
	)


class Renderer:
	"""Renders package and summary nodes to Markdown."""

	def __init__(
		self,
		environment: Environment | None = None,
		options: MarkdownOptions | None = None,
		log: logging.Logger | None = None,
	) -> None:
		"""
		Initialize the renderer.

		Args:
		    environment: Jinja2 environment, a default one is created if omitted
		    options: Doc comment conversion options
		    log: Logger receiving diagnostics, defaults to the module logger

		"""
		self.environment = environment or create_environment()
		self.options = options or MarkdownOptions()
		self.logger = log or logger

	def _context(self, target: RenderTarget, config: RenderConfig) -> dict:
		match target:
			case PackageNode():
				return {
					"node": target,
					"package": target.doc_model,
					**template_functions(config, target.position_index, self.options),
				}
			case SummaryNode():
				return {
					"summary": target,
					"packages": target.packages,
					**template_functions(config, None, self.options),
				}
		msg = f"unsupported render target {type(target).__name__}"
		raise RenderError(msg)

	def render(self, target: RenderTarget, config: RenderConfig, writer: TextIO) -> None:
		"""
		Render a node and stream the Markdown to a writer.

		Runs of newlines in the output are collapsed to a single newline.

		Args:
		    target: Package node or summary node
		    config: Render configuration
		    writer: Destination text stream

		Raises:
		    RenderError: If the template cannot be resolved or rendered, or the
		        writer fails. Anything already written must be discarded.

		"""
		name = target.template_name
		try:
			template = self.environment.get_template(name)
			output = MultiNewlineEliminator(writer)
			for chunk in template.generate(**self._context(target, config)):
				output.write(chunk)
		except TemplateError as e:
			msg = f"template {name}: {e}"
			raise RenderError(msg) from e
		except OSError as e:
			msg = f"writing {name} output: {e}"
			raise RenderError(msg) from e

	def render_to_string(self, target: RenderTarget, config: RenderConfig) -> str:
		"""Render a node and return the Markdown."""
		buffer = io.StringIO()
		self.render(target, config, buffer)
		return buffer.getvalue()
