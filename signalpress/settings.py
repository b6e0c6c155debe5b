#!/usr/bin/env python3
"""
Settings loader for Signalpress.
Supports configuration from signalpress.yml, signalpress.yaml, or signalpress.json files.

Values from the file and from the command line go through the same coercion,
so ``posts_per_page: "10"`` and ``git: "no"`` mean what they say.
"""

import os
import json
import yaml
from typing import Dict, Any, Optional

INT_SETTINGS = ('posts_per_page', 'top_posts', 'news_log_limit', 'build_year')
BOOL_SETTINGS = ('git',)
LIST_SETTINGS = ('news_keywords',)

TRUE_WORDS = ('true', 'yes', 'on', '1')
FALSE_WORDS = ('false', 'no', 'off', '0')


def read_yaml(f):
    return yaml.safe_load(f)


def read_json(f):
    return json.load(f)


READERS = {'.yml': read_yaml, '.yaml': read_yaml, '.json': read_json}


def read_config_file(config_path: str) -> Dict[str, Any]:
    """
    Parse a config file into a mapping.

    Raises:
        ValueError: unknown extension, malformed content, or a top level that is not a mapping
    """
    reader = READERS.get(os.path.splitext(config_path)[1].lower())
    if reader is None:
        raise ValueError(f"Unsupported config file format: {config_path}")
    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            data = reader(f)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ValueError(f"Invalid configuration file {config_path}: {e}")
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {config_path} must contain a mapping")
    return data


def coerce_setting(key: str, value: Any) -> Any:
    """Convert a raw setting to the type Signalpress uses for it; None passes through."""
    if value is None:
        return None
    if key in INT_SETTINGS:
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise ValueError(f"Setting '{key}' must be an integer, got {value!r}")
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"Setting '{key}' must be an integer, got {value!r}")
    if key in BOOL_SETTINGS:
        if isinstance(value, bool):
            return value
        word = str(value).strip().lower()
        if word in TRUE_WORDS:
            return True
        if word in FALSE_WORDS:
            return False
        raise ValueError(f"Setting '{key}' must be true or false, got {value!r}")
    if key in LIST_SETTINGS:
        if isinstance(value, str):
            value = value.split(',')
        if not isinstance(value, (list, tuple)):
            raise ValueError(f"Setting '{key}' must be a list, got {value!r}")
        return [str(item).strip() for item in value if str(item).strip()]
    return value


class SignalpressSettings:
    """Load and manage Signalpress configuration settings."""

    # Default configuration
    DEFAULT_SETTINGS = {
        'site_dir': 'website',
        'posts_dir': 'posts',
        'base_url': 'https://al-ice.ai',
        'site_name': 'al-ice.ai',
        'posts_per_page': 20,
        'top_posts': 3,
        'default_category': 'security',
        'analytics_id': None,
        'templates': None,
        'footer_note': None,
        'author_name': 'al-ice.ai Editorial',
        'news_keywords': ['news', 'hourly', 'digest', 'CVE'],
        'news_log_limit': 30,
        'git': True,
        'log_dir': 'logs',
        'build_year': None,
    }

    # Config file names to look for (in order of preference)
    CONFIG_FILES = ['signalpress.yml', 'signalpress.yaml', 'signalpress.json']

    def __init__(self, config_dir: str = None):
        """
        Initialize settings loader.

        Args:
            config_dir: Directory to look for config files. Defaults to current directory.
        """
        self.config_dir = config_dir or os.getcwd()
        self.settings = self.DEFAULT_SETTINGS.copy()
        self.config_file_path = None

    def find_config_file(self) -> Optional[str]:
        candidates = (os.path.join(self.config_dir, name) for name in self.CONFIG_FILES)
        return next((path for path in candidates if os.path.isfile(path)), None)

    def load_settings(self) -> Dict[str, Any]:
        """
        Load settings from the first configuration file found.

        A file that cannot be read is reported and ignored. Inside a readable
        file, unknown keys and values of the wrong type are reported one by one
        and the default is kept for them.

        Returns:
            Dictionary of configuration settings
        """
        self.config_file_path = self.find_config_file()
        if not self.config_file_path:
            return self.settings.copy()

        try:
            loaded = read_config_file(self.config_file_path)
        except (ValueError, OSError) as e:
            print(f"Warning: Failed to load config file {self.config_file_path}: {e}")
            return self.settings.copy()

        for key, value in loaded.items():
            if key not in self.DEFAULT_SETTINGS:
                print(f"Warning: Unknown setting '{key}' in {self.config_file_path}")
                continue
            try:
                self.settings[key] = coerce_setting(key, value)
            except ValueError as e:
                print(f"Warning: {e}; using default {self.DEFAULT_SETTINGS[key]!r}")

        print(f"Loaded configuration from: {os.path.relpath(self.config_file_path)}")
        return self.settings.copy()

    SAMPLE_YAML = """\
# Signalpress Configuration File

# Site information
base_url: https://example.com
site_name: example.com
analytics_id: null  # e.g. G-XXXXXXXXXX
footer_note: null

# Layout
site_dir: website
posts_dir: posts
templates: null  # directory with shell.html etc. to override the bundled ones

# Listings
posts_per_page: 20
top_posts: 3
default_category: security

# News log and bylines
author_name: Editorial
news_keywords: [{keywords}]
news_log_limit: 30

# Build
git: true  # read last-modified dates from git history
log_dir: logs
"""

    def sample_config_text(self, file_format: str) -> str:
        if file_format in ('yml', 'yaml'):
            return self.SAMPLE_YAML.format(keywords=', '.join(self.DEFAULT_SETTINGS['news_keywords']))
        if file_format == 'json':
            sample_config = {k: v for k, v in self.DEFAULT_SETTINGS.items() if k != 'build_year'}
            sample_config.update({'base_url': 'https://example.com', 'site_name': 'example.com',
                                  'author_name': 'Editorial'})
            return json.dumps(sample_config, indent=2) + '\n'
        raise ValueError(f"Unsupported config file format: {file_format}")

    def create_sample_config(self, file_format: str = 'yml') -> str:
        """
        Create a sample configuration file.

        Args:
            file_format: Format for config file ('yml', 'yaml', or 'json')

        Returns:
            Path to created sample config file
        """
        content = self.sample_config_text(file_format)
        config_path = os.path.join(self.config_dir, f'signalpress.{file_format}')
        with open(config_path, 'w', encoding='utf-8') as f:
            f.write(content)
        return config_path

    def merge_with_args(self, args_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge configuration settings with command-line arguments.
        Command-line arguments take precedence over config file settings.

        Raises:
            ValueError: an argument has the wrong type for its setting
        """
        merged = self.settings.copy()
        merged.update({key: coerce_setting(key, value) for key, value in args_dict.items() if value is not None})
        return merged
