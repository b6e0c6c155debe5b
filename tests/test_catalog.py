"""Tests for the post catalog and category index."""

import pytest
import os
from pathlib import Path

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from signalpress.catalog import (
    PostRecord, build_catalog, build_category_index, discover_pages, sorted_categories, url_path_for,
)
from conftest import StubHistory


class TestDiscoverPages:
    """Test cases for discover_pages."""

    def test_finds_nested_pages(self, site_dir, write_post):
        """Test pages at any depth are found."""
        a = write_post('a', title='A')
        b = write_post('2024/01/deep/b', title='B')
        found = list(discover_pages(os.path.join(site_dir, 'posts')))
        assert sorted(found) == sorted([a, b])

    def test_skips_generated_listing_pages(self, site_dir, write_post):
        """Test the listing index and pagination pages are not treated as posts."""
        post = write_post('real', title='Real')
        posts_root = Path(site_dir) / 'posts'
        (posts_root / 'index.html').write_text(
            '<meta name="post:title" content="Listing"><meta name="post:date" content="2024-01-01">')
        (posts_root / 'page' / '2').mkdir(parents=True)
        (posts_root / 'page' / '2' / 'index.html').write_text(
            '<meta name="post:title" content="Page 2"><meta name="post:date" content="2024-01-01">')

        assert list(discover_pages(str(posts_root))) == [post]

    def test_ignores_other_files(self, site_dir, write_post):
        """Test only files with the page filename are returned."""
        post = write_post('a', title='A')
        (Path(site_dir) / 'posts' / 'a' / 'notes.html').write_text('x')
        assert list(discover_pages(os.path.join(site_dir, 'posts'))) == [post]

    def test_missing_root(self, temp_dir):
        """Test a missing posts directory yields nothing."""
        assert list(discover_pages(os.path.join(temp_dir, 'nope'))) == []


def test_url_path_for(site_dir):
    page = os.path.join(site_dir, 'posts', '2024', '01', 'hello', 'index.html')
    assert url_path_for(page, site_dir) == '/posts/2024/01/hello/'


class TestBuildCatalog:
    """Test cases for build_catalog."""

    def test_one_record_per_valid_page(self, site_dir, write_post):
        """Test the catalog holds exactly the qualifying pages."""
        write_post('one', title='One', date='2024-01-01')
        write_post('two', title='Two', date='2024-01-02')
        write_post('no-title', title=None, date='2024-01-03')
        write_post('no-date', title='No date', date=None)
        write_post('bad-date', title='Bad date', date='03/01/2024')

        catalog = build_catalog(site_dir, history=StubHistory())

        assert [p.title for p in catalog] == ['Two', 'One']
        assert all(isinstance(p, PostRecord) for p in catalog)

    def test_sorted_by_date_descending(self, sample_site):
        """Test newer posts come first."""
        catalog = build_catalog(sample_site, history=StubHistory())
        dates = [p.date for p in catalog]
        assert dates == sorted(dates, reverse=True)
        assert [p.title for p in catalog] == ['Gamma', 'Beta', 'Alpha']

    def test_equal_dates_keep_traversal_order(self, site_dir, write_post):
        """Test ties are broken by traversal order."""
        write_post('b-second', title='B', date='2024-05-05')
        write_post('a-first', title='A', date='2024-05-05')
        write_post('c-older', title='C', date='2024-01-01')
        catalog = build_catalog(site_dir, history=StubHistory())
        assert [p.title for p in catalog] == ['A', 'B', 'C']

    def test_record_fields(self, site_dir, write_post):
        """Test url path, category defaults and lastmod fallback."""
        write_post('2024/01/hello', title='Hello', date='2024-01-15')
        (post,) = build_catalog(site_dir, history=StubHistory())
        assert post.url_path == '/posts/2024/01/hello/'
        assert post.category == 'security'
        assert post.category_label == 'Security'
        assert post.lastmod == '2024-01-15'

    def test_lastmod_from_history(self, site_dir, write_post):
        """Test a history date overrides the declared date."""
        page = write_post('hello', title='Hello', date='2024-01-15')
        history = StubHistory({os.path.abspath(page): '2024-06-30'})
        (post,) = build_catalog(site_dir, history=history)
        assert post.lastmod == '2024-06-30'
        assert history.queried == [page]

    def test_without_history(self, site_dir, write_post):
        """Test building without any history provider."""
        write_post('hello', title='Hello', date='2024-01-15')
        (post,) = build_catalog(site_dir, history=None)
        assert post.lastmod == '2024-01-15'

    def test_url_paths_unique(self, large_site):
        """Test every record has its own URL path."""
        catalog = build_catalog(large_site, history=StubHistory())
        assert len(catalog) == 45
        assert len({p.url_path for p in catalog}) == 45

    def test_unreadable_page_is_skipped(self, site_dir, write_post):
        """Test a page that cannot be decoded is excluded."""
        write_post('good', title='Good')
        bad = Path(site_dir) / 'posts' / 'bad'
        bad.mkdir()
        (bad / 'index.html').write_bytes(b'\xff\xfe\x00<meta name="post:title" content="x">')
        catalog = build_catalog(site_dir, history=StubHistory())
        assert [p.title for p in catalog] == ['Good']

    def test_records_are_immutable(self, sample_site):
        """Test catalog records cannot be modified."""
        post = build_catalog(sample_site, history=StubHistory())[0]
        with pytest.raises(AttributeError):
            post.title = 'changed'


class TestCategoryIndex:
    """Test cases for build_category_index."""

    def test_groups_by_slug(self, sample_site):
        """Test posts are grouped with their label in catalog order."""
        catalog = build_catalog(sample_site, history=StubHistory())
        index = build_category_index(catalog)

        assert set(index) == {'ai', 'security'}
        assert index['ai'].label == 'AI'
        assert [p.title for p in index['ai'].posts] == ['Gamma', 'Alpha']
        assert [p.title for p in index['security'].posts] == ['Beta']

    def test_label_from_first_post(self):
        """Test the first post seen for a slug decides its label."""
        catalog = [
            PostRecord('New', '2024-02-01', 'ai', 'Artificial Intelligence', '/posts/new/', '2024-02-01'),
            PostRecord('Old', '2024-01-01', 'ai', 'AI', '/posts/old/', '2024-01-01'),
        ]
        assert build_category_index(catalog)['ai'].label == 'Artificial Intelligence'

    def test_sorted_alphabetically(self):
        """Test category iteration is alphabetical regardless of catalog order."""
        catalog = [
            PostRecord('1', '2024-03-01', 'zeta', 'Zeta', '/posts/1/', '2024-03-01'),
            PostRecord('2', '2024-02-01', 'alpha', 'Alpha', '/posts/2/', '2024-02-01'),
            PostRecord('3', '2024-01-01', 'mid', 'Mid', '/posts/3/', '2024-01-01'),
        ]
        slugs = [slug for slug, _ in sorted_categories(build_category_index(catalog))]
        assert slugs == ['alpha', 'mid', 'zeta']

    def test_empty_catalog(self):
        assert build_category_index([]) == {}
