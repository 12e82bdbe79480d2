"""
Configuration settings for the movie catalog.
Values come from environment variables with defaults suited to the TMDB popular list.
"""

import os  # environment access
from dataclasses import dataclass  # settings container
from pathlib import Path  # filesystem-safe paths
from typing import Mapping, Optional  # type hints

from loguru import logger  # console logger

# Remote catalog API
DEFAULT_BASE_URL = "https://api.themoviedb.org/3"
DEFAULT_LANGUAGE = "en-US"
DEFAULT_TIMEOUT_S = 10.0

# The popular list is swept 100 pages deep, 10 source pages per UI page
DEFAULT_TOTAL_PAGES = 100
DEFAULT_PAGES_PER_UI_PAGE = 10

# Offline snapshot document
DEFAULT_CATALOG_FILE = Path('data') / 'movies.json'

DEFAULT_LOG_LEVEL = "INFO"


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
	raw = env.get(name)
	if raw is None or not raw.strip():
		return default
	try:
		value = int(raw)
	except ValueError:
		logger.warning(f"[Config] {name}={raw!r} is not an integer, using {default}")
		return default
	if value < 1:
		logger.warning(f"[Config] {name}={value} must be positive, using {default}")
		return default
	return value


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
	raw = env.get(name)
	if raw is None or not raw.strip():
		return default
	try:
		return float(raw)
	except ValueError:
		logger.warning(f"[Config] {name}={raw!r} is not a number, using {default}")
		return default


@dataclass
class Settings:
	api_key: Optional[str] = None
	base_url: str = DEFAULT_BASE_URL
	language: str = DEFAULT_LANGUAGE
	timeout_s: float = DEFAULT_TIMEOUT_S
	total_pages: int = DEFAULT_TOTAL_PAGES
	pages_per_ui_page: int = DEFAULT_PAGES_PER_UI_PAGE
	catalog_file: Path = DEFAULT_CATALOG_FILE
	log_level: str = DEFAULT_LOG_LEVEL

	@classmethod
	def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'Settings':
		"""Build settings from the process environment (or any mapping, for tests)."""
		env = os.environ if env is None else env
		return cls(
			api_key=env.get('TMDB_API_KEY') or None,
			base_url=env.get('TMDB_BASE_URL', DEFAULT_BASE_URL).rstrip('/'),
			language=env.get('TMDB_LANGUAGE', DEFAULT_LANGUAGE),
			timeout_s=_float_env(env, 'TMDB_TIMEOUT', DEFAULT_TIMEOUT_S),
			total_pages=_int_env(env, 'MOVIE_CATALOG_TOTAL_PAGES', DEFAULT_TOTAL_PAGES),
			pages_per_ui_page=_int_env(env, 'MOVIE_CATALOG_PAGES_PER_UI_PAGE', DEFAULT_PAGES_PER_UI_PAGE),
			catalog_file=Path(env.get('MOVIE_CATALOG_FILE', str(DEFAULT_CATALOG_FILE))),
			log_level=env.get('MOVIE_CATALOG_LOG_LEVEL', DEFAULT_LOG_LEVEL).upper(),
		)
