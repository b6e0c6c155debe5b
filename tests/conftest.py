"""Test configuration and fixtures for Signalpress tests."""

import pytest
import tempfile
import shutil
import os
from pathlib import Path

POST_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <title>{title}</title>
{meta}
</head>
<body>
  <main>
    <article>
      <h1>{title}</h1>
      <div class="post-meta">
        <time datetime="{date}">{date}</time>
        <a class="badge" href="/categories/{category}/">{label}</a>
        </div>
    </article>
  </main>
</body>
</html>
"""


def post_html(title='Test Post', date='2024-01-01', category=None, label=None):
    """Render a post page carrying the given meta tags (None leaves a tag out)."""
    meta = []
    if title is not None:
        meta.append(f'  <meta name="post:title" content="{title}" />')
    if date is not None:
        meta.append(f'  <meta name="post:date" content="{date}" />')
    if category is not None:
        meta.append(f'  <meta name="post:category" content="{category}" />')
    if label is not None:
        meta.append(f'  <meta name="post:categoryLabel" content="{label}" />')
    return POST_TEMPLATE.format(
        title=title or '',
        date=date or '',
        category=category or 'security',
        label=label or 'Security',
        meta='\n'.join(meta),
    )


class StubHistory:
    """History provider returning fixed dates instead of asking git."""

    def __init__(self, dates=None, commits=None):
        self.dates = dates or {}
        self.commits = commits or []
        self.queried = []

    def last_modified(self, path):
        self.queried.append(path)
        return self.dates.get(os.path.abspath(path))

    def recent_commits(self, paths, limit=60):
        return self.commits[:limit]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def site_dir(temp_dir):
    """Create an empty site with a posts directory."""
    site = Path(temp_dir) / 'website'
    (site / 'posts').mkdir(parents=True)
    return str(site)


@pytest.fixture
def write_post(site_dir):
    """Write a post page at posts/<rel_dir>/index.html and return its path."""
    def _write(rel_dir, **kwargs):
        post_dir = Path(site_dir) / 'posts' / rel_dir
        post_dir.mkdir(parents=True, exist_ok=True)
        page = post_dir / 'index.html'
        page.write_text(post_html(**kwargs), encoding='utf-8')
        return str(page)
    return _write


@pytest.fixture
def stub_history():
    return StubHistory()


@pytest.fixture
def sample_site(site_dir, write_post):
    """A small site with three posts in two categories."""
    write_post('2024/01/alpha', title='Alpha', date='2024-01-10', category='ai', label='AI')
    write_post('2024/02/beta', title='Beta', date='2024-02-05', category='security', label='Security')
    write_post('2024/03/gamma', title='Gamma', date='2024-03-01', category='ai', label='AI')
    return site_dir


@pytest.fixture
def large_site(site_dir, write_post):
    """45 posts spread over three categories, one per day."""
    categories = [('ai', 'AI'), ('news', 'News'), ('security', 'Security')]
    for i in range(45):
        slug, label = categories[i % 3]
        day = f"2024-{(i // 28) + 1:02d}-{(i % 28) + 1:02d}"
        write_post(f'post-{i:02d}', title=f'Post {i:02d}', date=day, category=slug, label=label)
    return site_dir
