"""
Signalpress - static index builder for a pre-rendered HTML blog.

Signalpress walks a tree of rendered post pages, reads the ``post:*`` meta
tags each page carries, and regenerates the derived pages of the site: the
home page, paginated post listings, category pages, the XML sitemap, the
JSON search index and a commit-derived news log.
"""

__version__ = "1.0.0"
__author__ = "al-ice.ai Editorial"
__email__ = "editorial@al-ice.ai"

from .core import SiteBuilder
from .catalog import PostRecord, build_catalog, build_category_index

__all__ = ['SiteBuilder', 'PostRecord', 'build_catalog', 'build_category_index']
