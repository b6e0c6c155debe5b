"""
Post catalog and category index.

The catalog is built once per run from the rendered post pages and is
read-only afterwards; every generated page is derived from it.
"""

import logging
import os
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple

from .metadata import DEFAULT_CATEGORY, extract_post_meta

PAGE_FILENAME = 'index.html'
PAGINATION_DIR = 'page'

logger = logging.getLogger('Signalpress.catalog')


class PostRecord(NamedTuple):
    """One rendered post page."""
    title: str
    date: str
    category: str
    category_label: str
    url_path: str
    lastmod: str

    def to_search_entry(self) -> Dict[str, str]:
        return {
            'title': self.title,
            'date': self.date,
            'category': self.category,
            'categoryLabel': self.category_label,
            'urlPath': self.url_path,
        }


class CategoryGroup(NamedTuple):
    label: str
    posts: List[PostRecord]


def discover_pages(posts_root: str, page_filename: str = PAGE_FILENAME) -> Iterator[str]:
    """
    Yield every post page below ``posts_root``.

    The listing pages generated under ``posts_root`` (its own index page and
    everything in ``page/``) are skipped.
    """
    if not os.path.isdir(posts_root):
        logger.warning(f"Posts directory not found: {posts_root}")
        return

    root_index = os.path.join(posts_root, page_filename)
    pagination_root = os.path.join(posts_root, PAGINATION_DIR)

    for dirpath, dirnames, filenames in os.walk(posts_root):
        dirnames.sort()
        if dirpath == posts_root and PAGINATION_DIR in dirnames:
            dirnames.remove(PAGINATION_DIR)
        if page_filename not in filenames:
            continue
        page_path = os.path.join(dirpath, page_filename)
        if page_path == root_index or page_path.startswith(pagination_root + os.sep):
            continue
        yield page_path


def url_path_for(page_path: str, site_dir: str, page_filename: str = PAGE_FILENAME) -> str:
    """Map ``<site>/posts/a/b/index.html`` to ``/posts/a/b/``."""
    rel = os.path.relpath(page_path, site_dir).replace(os.sep, '/')
    if rel.endswith(page_filename):
        rel = rel[:-len(page_filename)]
    return '/' + rel


def read_page(page_path: str) -> Optional[str]:
    try:
        with open(page_path, 'r', encoding='utf-8') as f:
            return f.read()
    except (IOError, OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read post page {page_path}: {e}")
        return None


def build_catalog(site_dir: str, posts_dir: str = 'posts', history=None,
                  default_category: str = DEFAULT_CATEGORY) -> List[PostRecord]:
    """
    Build the ordered post catalog.

    Args:
        site_dir: Root of the published site; URL paths are relative to it
        posts_dir: Posts directory, relative to ``site_dir``
        history: Object with ``last_modified(path)``; None skips lookups
        default_category: Category slug for pages without ``post:category``

    Returns:
        Post records, newest first
    """
    posts_root = os.path.join(site_dir, posts_dir)
    records = []
    seen = set()

    for page_path in discover_pages(posts_root):
        html = read_page(page_path)
        if html is None:
            continue

        meta = extract_post_meta(html, default_category)
        if meta is None:
            logger.debug(f"Skipping page without post metadata: {page_path}")
            continue

        url_path = url_path_for(page_path, site_dir)
        if url_path in seen:
            continue
        seen.add(url_path)

        lastmod = history.last_modified(page_path) if history is not None else None

        records.append(PostRecord(
            title=meta['title'],
            date=meta['date'],
            category=meta['category'],
            category_label=meta['categoryLabel'],
            url_path=url_path,
            lastmod=lastmod or meta['date'],
        ))

    # sorted() is stable, so equal dates keep traversal order
    return sorted(records, key=lambda r: r.date, reverse=True)


def build_category_index(catalog: List[PostRecord]) -> Dict[str, CategoryGroup]:
    """Group the catalog by category slug, keeping catalog order within each group."""
    index = {}
    for post in catalog:
        if post.category not in index:
            index[post.category] = CategoryGroup(label=post.category_label, posts=[])
        index[post.category].posts.append(post)
    return index


def sorted_categories(index: Dict[str, CategoryGroup]) -> List[Tuple[str, CategoryGroup]]:
    return sorted(index.items(), key=lambda item: item[0])
