"""
Page rendering.

Every generated document is a content fragment wrapped in the shared page
shell (``shell.html``). Both are Jinja2 templates shipped with the package;
a site can point ``templates`` at its own copies.
"""

import logging
import os
from typing import Optional

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, TemplateSyntaxError, select_autoescape

PACKAGE_TEMPLATES = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'templates')


class PageRenderer:
    def __init__(self, site_name: str, base_url: str, build_year: int, analytics_id: Optional[str] = None,
                 templates_dir: Optional[str] = None, footer_note: Optional[str] = None,
                 listing_path: str = '/posts/'):
        self.site_name = site_name
        self.base_url = base_url.rstrip('/')
        self.build_year = build_year
        self.analytics_id = analytics_id
        self.footer_note = footer_note
        self.listing_path = listing_path
        self.logger = logging.getLogger('Signalpress.render')

        # Fall back to the bundled templates when the site has none of its own
        search_path = [PACKAGE_TEMPLATES]
        if templates_dir and os.path.isdir(templates_dir):
            search_path.insert(0, templates_dir)
        elif templates_dir:
            self.logger.warning(f"Templates directory not found: {templates_dir}, using bundled templates")
        self.templates_dir = search_path[0]

        self.env = Environment(
            loader=FileSystemLoader(search_path),
            autoescape=select_autoescape(['html', 'xml']),
            keep_trailing_newline=True,
        )

    def canonical(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def render_template(self, template_name: str, **context) -> str:
        """Render a template with the site-wide variables available."""
        context.setdefault('site_name', self.site_name)
        context.setdefault('base_url', self.base_url)
        context.setdefault('listing_path', self.listing_path)
        try:
            template = self.env.get_template(template_name)
        except (TemplateNotFound, TemplateSyntaxError) as e:
            self.logger.error(f"Template error in {template_name}: {e}")
            raise
        return template.render(**context)

    def render_fragment(self, template_name: str, **context) -> str:
        return self.render_template(template_name, **context)

    def render_page(self, title: str, canonical: str, description: Optional[str], body: str) -> str:
        """Wrap a body fragment in the page shell."""
        return self.render_template(
            'shell.html',
            title=title,
            canonical=canonical,
            description=description,
            body=body,
            analytics_id=self.analytics_id,
            year=self.build_year,
            footer_note=self.footer_note,
        )
