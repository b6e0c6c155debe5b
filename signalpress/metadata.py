"""
Meta tag extraction for rendered post pages.

Every post page carries its metadata in ``<meta name="post:..." content="...">``
tags. This module reads those tags from a parsed document rather than
pattern-matching the raw markup.
"""

import re
from datetime import datetime
from typing import Dict, Optional

from bs4 import BeautifulSoup

DEFAULT_CATEGORY = 'security'

REQUIRED_FIELDS = ('post:title', 'post:date')


def parse_html(html: str) -> BeautifulSoup:
    """Parse page markup with the standard library backend."""
    return BeautifulSoup(html, 'html.parser')


def find_meta_tag(soup: BeautifulSoup, name: str):
    """Return the first ``<meta>`` tag whose name matches ``name`` (case-insensitive)."""
    pattern = re.compile(r'^\s*' + re.escape(name) + r'\s*$', re.IGNORECASE)
    return soup.find('meta', attrs={'name': pattern})


def extract_meta(html, name: str) -> Optional[str]:
    """
    Get the trimmed ``content`` value of a named meta tag.

    Args:
        html: Raw page markup, or an already parsed document
        name: Value of the tag's ``name`` attribute, e.g. ``post:title``

    Returns:
        The content value, or None when the tag is missing or empty
    """
    soup = html if isinstance(html, BeautifulSoup) else parse_html(html)
    tag = find_meta_tag(soup, name)
    if tag is None:
        return None
    content = tag.get('content')
    if content is None:
        return None
    content = content.strip()
    return content or None


def is_iso_date(value: str) -> bool:
    """Check that a value is a ``YYYY-MM-DD`` calendar date."""
    try:
        datetime.strptime(value, '%Y-%m-%d')
    except (TypeError, ValueError):
        return False
    return len(value) == 10


def default_category_label(slug: str) -> str:
    return slug[:1].upper() + slug[1:]


def extract_post_meta(html: str, default_category: str = DEFAULT_CATEGORY) -> Optional[Dict[str, str]]:
    """
    Read the post metadata fields from a page.

    Pages without a title or a valid ISO date are not posts and yield None.
    Category falls back to ``default_category`` and the label to the
    capitalized slug.
    """
    soup = parse_html(html)
    title = extract_meta(soup, 'post:title')
    date = extract_meta(soup, 'post:date')
    if not title or not date or not is_iso_date(date):
        return None

    category = extract_meta(soup, 'post:category') or default_category
    category_label = extract_meta(soup, 'post:categoryLabel') or default_category_label(category)

    return {
        'title': title,
        'date': date,
        'category': category,
        'categoryLabel': category_label,
    }
