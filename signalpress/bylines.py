"""
One-off migration that adds an author byline to every post page.

Each page gets a ``post:author`` meta tag after its ``post:categoryLabel`` tag
and a ``<span class="post-author">`` after the category badge in the post
header. Pages that already carry an author are left alone.

The parse tree is only used to locate the two anchors. The new markup is
spliced into the page text at their source positions, so everything else in
the page stays byte for byte as it was.
"""

import logging
import os
import re
from html import escape
from typing import List, Optional

from bs4 import NavigableString

from .catalog import discover_pages, read_page
from .metadata import find_meta_tag, parse_html

DEFAULT_AUTHOR = 'al-ice.ai Editorial'

CLOSING_ANCHOR = re.compile(r'</a\s*>', re.IGNORECASE)

logger = logging.getLogger('Signalpress.bylines')


def has_author(html: str) -> bool:
    return 'post:author' in html or 'post-author' in html


def find_badge_anchor(soup):
    """
    Return the category badge if it closes its container, else None.

    The byline goes between the badge and the end of the post-meta block, so a
    badge followed by other elements is not a valid anchor.
    """
    badge = soup.find('a', class_='badge')
    if badge is None or not badge.get_text(strip=True):
        return None
    if badge.find_next_sibling() is not None:
        return None
    for sibling in badge.next_siblings:
        if isinstance(sibling, NavigableString) and sibling.strip():
            return None
    return badge


def line_offsets(html: str) -> List[int]:
    """Offsets of the first character of every line, as html.parser counts lines."""
    offsets = [0]
    pos = html.find('\n')
    while pos != -1:
        offsets.append(pos + 1)
        pos = html.find('\n', pos + 1)
    return offsets


def tag_start(html: str, offsets: List[int], tag) -> Optional[int]:
    """Offset of ``<name`` for a parsed tag, or None if the position does not line up."""
    if tag.sourceline is None or tag.sourceline > len(offsets):
        return None
    start = offsets[tag.sourceline - 1] + tag.sourcepos
    if html[start:start + len(tag.name) + 1].lower() != f'<{tag.name}':
        return None
    return start


def start_tag_end(html: str, start: int) -> Optional[int]:
    """Offset just past the ``>`` closing the start tag at ``start``, skipping quoted values."""
    quote = None
    for i in range(start, len(html)):
        c = html[i]
        if quote:
            if c == quote:
                quote = None
        elif c in '"\'':
            quote = c
        elif c == '>':
            return i + 1
    return None


def meta_insert_point(html: str, offsets: List[int], tag) -> Optional[int]:
    start = tag_start(html, offsets, tag)
    return start_tag_end(html, start) if start is not None else None


def badge_insert_point(html: str, offsets: List[int], badge) -> Optional[int]:
    start = tag_start(html, offsets, badge)
    if start is None:
        return None
    end = start_tag_end(html, start)
    if end is None:
        return None
    closing = CLOSING_ANCHOR.search(html, end)
    return closing.end() if closing else None


def add_byline(html: str, author: str = DEFAULT_AUTHOR, path: str = '<string>') -> Optional[str]:
    """
    Add the author meta tag and byline to a page.

    Returns:
        The updated markup, or None when the page needs no change
    """
    if has_author(html):
        logger.info(f"  [skip] {path} (already has author)")
        return None

    soup = parse_html(html)
    offsets = line_offsets(html)
    inserts = []

    label_tag = find_meta_tag(soup, 'post:categoryLabel')
    if label_tag is not None:
        point = meta_insert_point(html, offsets, label_tag)
        if point is not None:
            inserts.append((point, f'\n  <meta name="post:author" content="{escape(author)}" />'))
        else:
            logger.warning(f"  [no meta anchor] {path}")

    badge = find_badge_anchor(soup)
    point = badge_insert_point(html, offsets, badge) if badge is not None else None
    if point is not None:
        inserts.append((point, f'\n          <span class="post-author">by {escape(author, quote=False)}</span>'))
    else:
        logger.warning(f"  [no byline anchor] {path}")

    if not inserts:
        return None

    # Splice from the end so earlier offsets stay valid.
    for point, fragment in sorted(inserts, reverse=True):
        html = html[:point] + fragment + html[point:]
    return html


def add_author_bylines(site_dir: str, posts_dir: str = 'posts', author: str = DEFAULT_AUTHOR) -> int:
    """
    Run the byline migration over every post page.

    A page that fails is logged and skipped; the rest of the batch still runs.

    Returns:
        Number of pages updated
    """
    posts_root = os.path.join(site_dir, posts_dir)
    logger.info("Adding author bylines to posts...")
    updated = 0

    for page_path in discover_pages(posts_root):
        try:
            html = read_page(page_path)
            if html is None:
                continue
            new_html = add_byline(html, author, page_path)
            if new_html is None:
                continue
            with open(page_path, 'w', encoding='utf-8') as f:
                f.write(new_html)
            logger.info(f"  [updated] {page_path}")
            updated += 1
        except Exception as e:
            logger.error(f"  [error] {page_path}: {e}")

    logger.info(f"Updated bylines: {updated} posts")
    return updated
