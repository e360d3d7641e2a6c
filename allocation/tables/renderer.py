"""
HTML Renderer for table element trees.

Serializes `Element` trees to HTML with Jinja2 and wraps them in a
standalone page, optionally with the click handlers that turn header and
chevron clicks into sort and expand requests.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from .elements import Element

logger = logging.getLogger(__name__)


class TableRenderer:
    """Renders element trees to HTML."""

    def __init__(self, template_dir: Optional[str] = None):
        if template_dir is None:
            template_dir = Path(__file__).parent / "templates"
        else:
            template_dir = Path(template_dir)

        self.template_dir = template_dir

        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(['html', 'xml'], default_for_string=True),
        )
        self.env.filters['format_datetime'] = self._format_datetime

    def render(self, root: Element) -> Markup:
        """Render one element tree to an HTML fragment."""
        template = self.env.get_template("element.html")
        return Markup(template.render(root=root))

    def render_page(
        self,
        root: Element,
        title: str = "Positions",
        interactive: bool = False,
        api_root: str = "/api/positions",
        generated_at: Optional[datetime] = None,
        output_path: Optional[str] = None,
    ) -> str:
        """
        Render a complete HTML page around a table.

        Args:
            root: Table element tree
            title: Page title and heading
            interactive: Include the script posting sort/expand clicks
            api_root: URL prefix the script posts to
            generated_at: Timestamp shown under the heading
            output_path: Optional path to save the HTML file

        Returns:
            Rendered HTML string
        """
        template = self.env.get_template("page.html")
        html = template.render(
            title=title,
            table_html=self.render(root),
            interactive=interactive,
            api_root=api_root,
            generated_at=generated_at or datetime.now(),
        )

        if output_path:
            Path(output_path).parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(html)
            logger.info(f"Saved HTML table to {output_path}")

        return html

    @staticmethod
    def _format_datetime(dt) -> str:
        if isinstance(dt, str):
            return dt
        return dt.strftime('%B %d, %Y %H:%M')
