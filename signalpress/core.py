import os
import logging
from datetime import datetime
from typing import Dict, List, Optional

from .catalog import build_catalog, build_category_index, sorted_categories
from .history import GitHistory
from .metadata import DEFAULT_CATEGORY
from .pagination import Paginator, PAGE_SIZE
from .render import PageRenderer
from .sitemap import Sitemap, search_index_json

DEFAULT_TAGLINE = 'High-signal AI/security/automation notes.'
DEFAULT_HOME_HEADING = 'Latest AI signal'
DEFAULT_HOME_TITLE = 'latest AI signal'
DEFAULT_HOME_DESCRIPTION = ('Latest high-signal AI security, infrastructure, and research updates, '
                            'short summaries with primary sources.')


class InfoFilter(logging.Filter):
    """Filter to allow only warnings and selected INFO messages on the console."""
    def filter(self, record):
        if record.levelno >= logging.WARNING:
            return True
        allowed_messages = [
            "Site build completed in",
            "Built indexes:",
            "Building home page",
            "Building posts listing",
            "Building category pages",
            "Generating search index",
            "Generating XML sitemap",
            "Built /news/log/",
            "Adding author bylines",
            "Updated bylines:",
            "[updated]",
            "Loaded configuration from",
        ]
        return any(msg in record.getMessage() for msg in allowed_messages)


def setup_logging(log_dir: Optional[str] = None) -> logging.Logger:
    """Set up the Signalpress logger: filtered console output and an optional full log file."""
    logger = logging.getLogger('Signalpress')
    logger.setLevel(logging.DEBUG)

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.addFilter(InfoFilter())
        console_handler.setFormatter(logging.Formatter('%(message)s'))
        logger.addHandler(console_handler)

    if log_dir and not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        os.makedirs(log_dir, exist_ok=True)
        log_filename = datetime.now().strftime('signalpress_%Y-%m-%d_%H-%M-%S.log')
        file_handler = logging.FileHandler(os.path.join(log_dir, log_filename), encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        logger.addHandler(file_handler)

    return logger


def write_file(path: str, content: str, logger: logging.Logger) -> None:
    """Write a generated file, creating parent directories. Failures are fatal."""
    try:
        os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        logger.debug(f"Wrote {path}")
    except (IOError, OSError) as e:
        logger.error(f"Failed to write {path}: {e}")
        raise


class SiteBuilder:
    """Regenerate the derived pages of a site from its rendered post pages."""

    def __init__(self, site_dir='website', posts_dir='posts', base_url='https://example.com', site_name=None,
                 posts_per_page=PAGE_SIZE, top_posts=3, default_category=DEFAULT_CATEGORY, history=None,
                 renderer=None, build_year=None, analytics_id=None, templates_dir=None, footer_note=None,
                 tagline=DEFAULT_TAGLINE, log_dir=None):
        self.site_dir = site_dir
        self.posts_dir = posts_dir.strip('/')
        self.base_url = base_url.rstrip('/')
        self.site_name = site_name or self.base_url.split('://', 1)[-1]
        self.posts_per_page = max(1, int(posts_per_page))
        self.top_posts = max(0, int(top_posts))
        self.default_category = default_category
        self.tagline = tagline
        self.history = history if history is not None else GitHistory(cwd=site_dir)
        self.build_year = build_year or datetime.now().year
        self.renderer = renderer or PageRenderer(
            site_name=self.site_name,
            base_url=self.base_url,
            build_year=self.build_year,
            analytics_id=analytics_id,
            templates_dir=templates_dir,
            footer_note=footer_note,
            listing_path=self.listing_path(),
        )
        self.logger = setup_logging(log_dir)

        self.catalog = None
        self.categories = None
        self.paginator = None

    def output_path(self, *parts) -> str:
        return os.path.join(self.site_dir, *parts)

    def listing_path(self) -> str:
        return f"/{self.posts_dir}/"

    def load_catalog(self):
        """Build the catalog and category index once per run."""
        if self.catalog is None:
            self.catalog = build_catalog(self.site_dir, self.posts_dir, self.history, self.default_category)
            self.categories = build_category_index(self.catalog)
            self.paginator = Paginator(len(self.catalog), self.posts_per_page, self.listing_path())
            self.logger.debug(f"Catalog holds {len(self.catalog)} posts in {len(self.categories)} categories")
        return self.catalog

    def render_posts_page(self, page_num: int) -> str:
        posts = self.paginator.page_slice(self.catalog, page_num)
        body = self.renderer.render_fragment(
            'posts.html',
            posts=posts,
            tagline=self.tagline,
            categories=sorted_categories(self.categories),
            links=self.paginator.links(page_num),
        )
        if page_num > 1:
            title = f"Posts (Page {page_num}) — {self.site_name}"
        else:
            title = f"Posts — {self.site_name}"
        return self.renderer.render_page(
            title=title,
            canonical=self.renderer.canonical(self.paginator.page_url(page_num)),
            description=self.tagline,
            body=body,
        )

    def build_posts_pages(self) -> int:
        """
        Build the paginated post listing.
        - posts/index.html for page 1
        - posts/page/<n>/index.html for pages 2..n
        """
        self.load_catalog()
        self.logger.info("Building posts listing")
        for page_num in range(1, self.paginator.total_pages + 1):
            if page_num == 1:
                path = self.output_path(self.posts_dir, 'index.html')
            else:
                path = self.output_path(self.posts_dir, 'page', str(page_num), 'index.html')
            write_file(path, self.render_posts_page(page_num), self.logger)
        return self.paginator.total_pages

    def build_home_page(self) -> None:
        self.load_catalog()
        self.logger.info("Building home page")
        top = self.catalog[:self.top_posts]
        latest = self.catalog[self.top_posts:self.top_posts + self.posts_per_page]
        body = self.renderer.render_fragment(
            'home.html',
            heading=DEFAULT_HOME_HEADING,
            tagline=self.tagline,
            categories=sorted_categories(self.categories),
            top=top,
            top_count=self.top_posts,
            latest=latest,
        )
        html = self.renderer.render_page(
            title=f"{self.site_name} — {DEFAULT_HOME_TITLE}",
            canonical=self.renderer.canonical('/'),
            description=DEFAULT_HOME_DESCRIPTION,
            body=body,
        )
        write_file(self.output_path('index.html'), html, self.logger)

    def build_category_pages(self) -> int:
        """Build the category index and one page per category."""
        self.load_catalog()
        self.logger.info("Building category pages")
        categories = sorted_categories(self.categories)

        body = self.renderer.render_fragment('categories.html', categories=categories)
        html = self.renderer.render_page(
            title=f"Categories — {self.site_name}",
            canonical=self.renderer.canonical('/categories/'),
            description='Browse posts by category.',
            body=body,
        )
        write_file(self.output_path('categories', 'index.html'), html, self.logger)

        for slug, group in categories:
            body = self.renderer.render_fragment('category.html', slug=slug, group=group)
            html = self.renderer.render_page(
                title=f"{group.label} — {self.site_name}",
                canonical=self.renderer.canonical(f'/categories/{slug}/'),
                description=f"Posts tagged {group.label}.",
                body=body,
            )
            write_file(self.output_path('categories', slug, 'index.html'), html, self.logger)
        return len(categories)

    def build_search_index(self) -> None:
        self.load_catalog()
        self.logger.info("Generating search index")
        write_file(self.output_path('assets', 'search-index.json'), search_index_json(self.catalog), self.logger)

    def collect_sitemap(self) -> Sitemap:
        """Gather every generated route and post URL with its last-modified date."""
        self.load_catalog()
        sitemap = Sitemap(self.base_url)

        def add(path, *file_parts):
            sitemap.add(path, self.history.last_modified(self.output_path(*file_parts)))

        add('/', 'index.html')
        add(self.listing_path(), self.posts_dir, 'index.html')
        add('/search/', 'search', 'index.html')
        for page_num in range(2, self.paginator.total_pages + 1):
            add(self.paginator.page_url(page_num), self.posts_dir, 'page', str(page_num), 'index.html')
        add('/categories/', 'categories', 'index.html')
        for slug, _ in sorted_categories(self.categories):
            add(f'/categories/{slug}/', 'categories', slug, 'index.html')
        for post in self.catalog:
            sitemap.add(post.url_path, post.lastmod)
        return sitemap

    def build_sitemap(self) -> int:
        sitemap = self.collect_sitemap()
        self.logger.info("Generating XML sitemap")
        write_file(self.output_path('sitemap.xml'), sitemap.to_xml(), self.logger)
        return len(sitemap)

    def build(self) -> Dict[str, int]:
        """Main build process."""
        self.load_catalog()
        pages = self.build_posts_pages()
        self.build_home_page()
        categories = self.build_category_pages()
        self.build_search_index()
        urls = self.build_sitemap()

        self.logger.info(f"Built indexes: {len(self.catalog)} posts, {len(self.categories)} categories")
        return {
            'posts': len(self.catalog),
            'categories': categories,
            'listing_pages': pages,
            'sitemap_urls': urls,
        }

    def posts_in_category(self, slug: str) -> List:
        self.load_catalog()
        group = self.categories.get(slug)
        return list(group.posts) if group else []
