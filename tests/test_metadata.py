"""Tests for meta tag extraction."""

import pytest
import os

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from signalpress.metadata import extract_meta, extract_post_meta, default_category_label, is_iso_date
from conftest import post_html


class TestExtractMeta:
    """Test cases for extract_meta."""

    def test_self_closing_tag(self):
        """Test reading a self-closing meta tag."""
        html = '<head><meta name="post:title" content="Hello" /></head>'
        assert extract_meta(html, 'post:title') == 'Hello'

    def test_open_tag(self):
        """Test reading a meta tag without the closing slash."""
        html = '<head><meta name="post:date" content="2024-05-01"></head>'
        assert extract_meta(html, 'post:date') == '2024-05-01'

    def test_name_is_case_insensitive(self):
        """Test that the name attribute matches regardless of case."""
        html = '<meta NAME="Post:Title" content="Mixed Case">'
        assert extract_meta(html, 'post:title') == 'Mixed Case'

    def test_single_quotes(self):
        """Test attributes quoted with single quotes."""
        html = "<meta name='post:category' content='ai'>"
        assert extract_meta(html, 'post:category') == 'ai'

    def test_content_is_trimmed(self):
        """Test surrounding whitespace is removed from the value."""
        html = '<meta name="post:title" content="   Padded title  ">'
        assert extract_meta(html, 'post:title') == 'Padded title'

    def test_missing_tag(self):
        """Test that an absent tag gives None."""
        assert extract_meta('<meta name="description" content="x">', 'post:title') is None

    def test_missing_or_blank_content(self):
        """Test that a tag without usable content gives None."""
        assert extract_meta('<meta name="post:title">', 'post:title') is None
        assert extract_meta('<meta name="post:title" content="   ">', 'post:title') is None

    def test_entities_are_decoded(self):
        """Test HTML entities in the content value are decoded."""
        html = '<meta name="post:title" content="Q&amp;A with &quot;experts&quot;">'
        assert extract_meta(html, 'post:title') == 'Q&A with "experts"'

    def test_name_must_match_exactly(self):
        """Test that a longer name sharing a prefix is not matched."""
        html = '<meta name="post:categoryLabel" content="AI">'
        assert extract_meta(html, 'post:category') is None


class TestExtractPostMeta:
    """Test cases for extract_post_meta."""

    def test_all_fields(self):
        """Test a page with every post field present."""
        meta = extract_post_meta(post_html('Title', '2024-01-02', 'ai', 'AI'))
        assert meta == {'title': 'Title', 'date': '2024-01-02', 'category': 'ai', 'categoryLabel': 'AI'}

    def test_missing_title(self):
        """Test a page without a title is not a post."""
        assert extract_post_meta(post_html(title=None)) is None

    def test_missing_date(self):
        """Test a page without a date is not a post."""
        assert extract_post_meta(post_html(date=None)) is None

    def test_invalid_date(self):
        """Test a page whose date is not ISO formatted is not a post."""
        assert extract_post_meta(post_html(date='January 2, 2024')) is None
        assert extract_post_meta(post_html(date='2024-13-40')) is None

    def test_category_defaults(self):
        """Test the fallback category and its derived label."""
        meta = extract_post_meta(post_html('T', '2024-01-01'))
        assert meta['category'] == 'security'
        assert meta['categoryLabel'] == 'Security'

    def test_custom_default_category(self):
        """Test a configured fallback category."""
        meta = extract_post_meta(post_html('T', '2024-01-01'), default_category='misc')
        assert meta['category'] == 'misc'
        assert meta['categoryLabel'] == 'Misc'

    def test_label_defaults_from_category(self):
        """Test the label is derived from an explicit category."""
        meta = extract_post_meta(post_html('T', '2024-01-01', category='research'))
        assert meta['categoryLabel'] == 'Research'


@pytest.mark.parametrize('slug,label', [
    ('security', 'Security'),
    ('ai', 'Ai'),
    ('x', 'X'),
])
def test_default_category_label(slug, label):
    assert default_category_label(slug) == label


def test_is_iso_date():
    assert is_iso_date('2024-02-29')
    assert not is_iso_date('2023-02-29')
    assert not is_iso_date('2024-2-9')
    assert not is_iso_date('')
