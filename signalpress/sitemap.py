"""
XML sitemap and client-side search index.
"""

import json
from typing import Dict, Iterable, List, Optional, Tuple
from xml.sax.saxutils import escape

SITEMAP_NS = 'http://www.sitemaps.org/schemas/sitemap/0.9'


class Sitemap:
    """URL set keyed by absolute URL; adding a URL again replaces its lastmod."""

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip('/')
        self._urls: Dict[str, Optional[str]] = {}

    def add(self, path: str, lastmod: Optional[str] = None) -> None:
        self._urls[f"{self.base_url}{path}"] = lastmod or None

    def entries(self) -> List[Tuple[str, Optional[str]]]:
        return list(self._urls.items())

    def __len__(self) -> int:
        return len(self._urls)

    def __contains__(self, url: str) -> bool:
        return url in self._urls

    def format_entry(self, url: str, lastmod: Optional[str]) -> str:
        """Format a single sitemap entry."""
        lines = ['  <url>', f'    <loc>{escape(url)}</loc>']
        if lastmod:
            lines.append(f'    <lastmod>{escape(lastmod)}</lastmod>')
        lines.append('  </url>')
        return '\n'.join(lines)

    def to_xml(self) -> str:
        body = '\n'.join(self.format_entry(url, lastmod) for url, lastmod in self._urls.items())
        return (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            f'<urlset xmlns="{SITEMAP_NS}">\n'
            f'{body}\n'
            '</urlset>\n'
        )


def search_index(catalog: Iterable) -> List[Dict[str, str]]:
    """Flatten the catalog into the records the search page loads."""
    return [post.to_search_entry() for post in catalog]


def search_index_json(catalog: Iterable) -> str:
    return json.dumps(search_index(catalog), ensure_ascii=False, separators=(',', ':'))
