#!/usr/bin/env python3
"""
Command-line interface for Signalpress.
"""

import os
import sys
import time
import argparse
from datetime import datetime

from . import __version__
from .bylines import add_author_bylines
from .core import SiteBuilder, setup_logging
from .history import GitHistory, NullHistory
from .newslog import build_news_log
from .settings import SignalpressSettings

SAMPLE_POST = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <title>Hello, world</title>
  <meta name="post:title" content="Hello, world" />
  <meta name="post:date" content="{date}" />
  <meta name="post:category" content="news" />
  <meta name="post:categoryLabel" content="News" />
</head>
<body>
  <main>
    <article>
      <h1>Hello, world</h1>
      <div class="post-meta">
        <time datetime="{date}">{date}</time>
        <a class="badge" href="/categories/news/">News</a>
      </div>
      <p>Your first post. Add more pages under posts/ and run signalpress.</p>
    </article>
  </main>
</body>
</html>
"""


def create_starter_structure(site_dir: str, posts_dir: str = 'posts') -> None:
    """Create a site directory with a sample post."""
    for directory in [os.path.join(site_dir, posts_dir, 'hello-world'),
                      os.path.join(site_dir, 'assets', 'css')]:
        if os.path.exists(directory):
            print(f"Directory already exists: {directory}")
        else:
            os.makedirs(directory, exist_ok=True)
            print(f"Created directory: {directory}")

    post_path = os.path.join(site_dir, posts_dir, 'hello-world', 'index.html')
    if os.path.exists(post_path):
        print(f"Sample post already exists: {post_path}")
    else:
        with open(post_path, 'w', encoding='utf-8') as f:
            f.write(SAMPLE_POST.format(date=datetime.now().strftime('%Y-%m-%d')))
        print(f"Created sample post: {post_path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Signalpress - rebuild blog indexes from rendered post pages')
    parser.add_argument('--site-dir', dest='site_dir', type=str,
                        help='Root directory of the published site')
    parser.add_argument('--posts-dir', dest='posts_dir', type=str,
                        help='Posts directory, relative to the site directory')
    parser.add_argument('--base-url', dest='base_url', type=str,
                        help='Absolute site URL used for canonical links and the sitemap')
    parser.add_argument('--site-name', dest='site_name', type=str,
                        help='Site name shown in titles, header and footer')
    parser.add_argument('--posts-per-page', dest='posts_per_page', type=int,
                        help='Number of posts per listing page')
    parser.add_argument('--templates', type=str,
                        help='Directory with templates overriding the bundled ones')
    parser.add_argument('--year', dest='build_year', type=int,
                        help='Copyright year for the footer (defaults to the current year)')
    parser.add_argument('--no-git', dest='git', action='store_false', default=None,
                        help='Do not read last-modified dates from git history')
    parser.add_argument('--news-log', action='store_true',
                        help='Also build the news log page')
    parser.add_argument('--add-bylines', action='store_true',
                        help='Add author bylines to every post page instead of building')
    parser.add_argument('--author', dest='author_name', type=str,
                        help='Author name used by --add-bylines')
    parser.add_argument('--init', type=str, choices=['yml', 'yaml', 'json'],
                        help='Create a sample configuration file and starter site')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv=None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    settings_loader = SignalpressSettings()

    if args.init:
        config_path = settings_loader.create_sample_config(args.init)
        print(f"Created sample configuration file: {config_path}")
        print("\nCreating starter site structure...")
        create_starter_structure(settings_loader.DEFAULT_SETTINGS['site_dir'])
        print("\nEdit the configuration file, then run 'signalpress' to build your indexes.")
        return

    settings_loader.load_settings()
    args_dict = {k: v for k, v in vars(args).items()
                 if v is not None and k not in ('init', 'news_log', 'add_bylines')}
    settings = settings_loader.merge_with_args(args_dict)

    site_dir = os.path.expanduser(settings['site_dir'])
    logger = setup_logging(settings['log_dir'])
    start_time = time.time()

    try:
        if args.add_bylines:
            add_author_bylines(site_dir, settings['posts_dir'], settings['author_name'])
            return

        history = GitHistory(cwd=site_dir) if settings['git'] else NullHistory()
        builder = SiteBuilder(
            site_dir=site_dir,
            posts_dir=settings['posts_dir'],
            base_url=settings['base_url'],
            site_name=settings['site_name'],
            posts_per_page=settings['posts_per_page'],
            top_posts=settings['top_posts'],
            default_category=settings['default_category'],
            history=history,
            build_year=settings['build_year'] or datetime.now().year,
            analytics_id=settings['analytics_id'],
            templates_dir=settings['templates'],
            footer_note=settings['footer_note'],
            log_dir=settings['log_dir'],
        )
        builder.build()

        if args.news_log:
            build_news_log(builder, settings['news_keywords'], settings['news_log_limit'])

        logger.info(f"Site build completed in {time.time() - start_time:.6f} seconds.")

    except Exception as e:
        logger.debug("Build failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
