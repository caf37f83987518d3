"""Jinja2 template loader for page rendering."""

from collections.abc import Mapping
from importlib.resources import files
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template, TemplateError, select_autoescape

from devhub.core.exceptions import RenderError
from devhub.core.utils import slugify
from devhub.engine import filters

TEMPLATE_SUFFIX = ".html"


class TemplateLoader:
    """Loads and renders page templates by identifier.

    A template identifier such as ``"tool-single"`` or
    ``"component/youtube-embed"`` maps to ``tool-single.html`` and
    ``components/youtube-embed.html`` under the template directory.
    """

    def __init__(self, template_dir: Path | None = None) -> None:
        """Initialize TemplateLoader.

        Args:
            template_dir: Path to template directory. Defaults to the templates
                shipped inside ``devhub.engine``.

        Raises:
            FileNotFoundError: If the directory does not exist

        """
        if template_dir is None:
            template_dir = Path(str(files("devhub.engine").joinpath("templates")))
        if not template_dir.is_dir():
            msg = f"Template directory not found: {template_dir}"
            raise FileNotFoundError(msg)

        self.template_dir = template_dir
        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._register_filters()

    def _register_filters(self) -> None:
        self.env.filters["format_date"] = filters.format_date
        self.env.filters["markdown"] = filters.markdown
        self.env.filters["slugify"] = slugify

    @staticmethod
    def template_path(template_name: str) -> str:
        """Return the file path of a template identifier relative to the template dir."""
        if template_name.startswith("component/"):
            template_name = "components/" + template_name.removeprefix("component/")
        return template_name + TEMPLATE_SUFFIX

    def load_template(self, template_name: str) -> Template:
        return self.env.get_template(self.template_path(template_name))

    def render(self, template_name: str, context: Mapping[str, Any]) -> str:
        """Render a template with a context mapping.

        Raises:
            RenderError: If the template is missing or fails while rendering

        """
        try:
            return self.load_template(template_name).render(**context)
        except TemplateError as e:
            raise RenderError(template_name, str(e) or type(e).__name__) from e
