"""Plain-text report rendering."""

import logging
from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"


class ReportRenderer:
    """Render operation reports from Jinja2 text templates.

    Each operation owns one ``<name>.txt.j2`` template. Templates receive
    the resolved parameters and any canned payloads as context.
    """

    def __init__(self, template_dir: Optional[Union[str, Path]] = None) -> None:
        """Initialize the renderer.

        Args:
            template_dir: Directory holding report templates. Defaults to
                the templates shipped with the package.

        Raises:
            FileNotFoundError: If the template directory doesn't exist
        """
        self.template_dir = Path(template_dir) if template_dir else TEMPLATE_DIR
        if not self.template_dir.exists():
            raise FileNotFoundError(
                f"Template directory not found: {self.template_dir}. "
                f"Please ensure the templates directory exists in {self.template_dir.parent}"
            )

        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def render(self, template_name: str, **context: Any) -> str:
        """Render a report template.

        Args:
            template_name: Template file name, e.g. ``websphere-deploy-ejb.txt.j2``
            **context: Template variables

        Returns:
            The rendered report text
        """
        template = self.env.get_template(template_name)
        return template.render(**context)
