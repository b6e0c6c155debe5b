"""
News log: an audit page of recent publishing activity.

Built from two sources: commit subjects from the repository history that
look like news publishing, and the catalog's posts in the ``news`` category.
"""

import re
from typing import Dict, List, Sequence, Tuple

from .core import write_file

NEWS_CATEGORY = 'news'
DEFAULT_KEYWORDS = ('news', 'hourly', 'digest', 'CVE')
COMMIT_SCAN_LIMIT = 60
DEFAULT_LIMIT = 30


def keyword_pattern(keywords: Sequence[str]):
    return re.compile('|'.join(re.escape(k) for k in keywords), re.IGNORECASE)


def format_commit_time(iso: str) -> str:
    return iso.replace('T', ' ').replace('Z', ' UTC')


def filter_commits(commits: Sequence[Tuple[str, str]], keywords: Sequence[str] = DEFAULT_KEYWORDS) -> List[Dict[str, str]]:
    """Keep commits whose subject mentions one of ``keywords``."""
    pattern = keyword_pattern(keywords)
    return [
        {'iso': iso, 'when': format_commit_time(iso), 'subject': subject}
        for iso, subject in commits
        if pattern.search(subject)
    ]


def news_posts(catalog, category: str = NEWS_CATEGORY) -> List:
    """Posts in the news category, most recently changed first."""
    posts = [p for p in catalog if p.category == category]
    return sorted(posts, key=lambda p: p.lastmod or '', reverse=True)


def build_news_log(builder, keywords: Sequence[str] = DEFAULT_KEYWORDS, limit: int = DEFAULT_LIMIT) -> str:
    """
    Write ``news/log/index.html`` for a ``SiteBuilder``.

    Returns:
        Path of the written page
    """
    catalog = builder.load_catalog()
    watched = [builder.output_path(builder.posts_dir), builder.output_path('news')]
    commits = filter_commits(builder.history.recent_commits(watched, COMMIT_SCAN_LIMIT), keywords)

    body = builder.renderer.render_fragment(
        'news_log.html',
        news_posts=news_posts(catalog)[:limit],
        commits=commits[:limit],
    )
    html = builder.renderer.render_page(
        title=f"News Log — {builder.site_name}",
        canonical=builder.renderer.canonical('/news/log/'),
        description='Operational log of recent news publishing and latest news posts.',
        body=body,
    )

    path = builder.output_path('news', 'log', 'index.html')
    write_file(path, html, builder.logger)
    builder.logger.info(f"Built /news/log/ with {len(commits[:limit])} commits")
    return path
