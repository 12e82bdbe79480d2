"""
Page sources.
A page source returns the raw records of one catalog page at a time:
    fetch_page(page) -> List[dict], raising PageFetchError on failure.
"""

from typing import Any, Dict, List, Optional, Protocol  # type hints

# HTTP client for the remote catalog API
import requests  # make web requests to TMDB

from loguru import logger  # console logger

from .config import Settings  # API key, base URL, timeout
from .errors import PageFetchError  # per-page failure


class PageSource(Protocol):
	def fetch_page(self, page: int) -> List[Dict[str, Any]]:
		...


class TMDBPageSource:
	"""
	Fetches pages of the TMDB "popular movies" list.
	Timeouts are delegated to requests; there is no retry here.
	"""
	ENDPOINT = "/movie/popular"

	def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
		if not settings.api_key:
			raise ValueError("TMDB API key not configured (set TMDB_API_KEY)")
		self.settings = settings
		self.session = session or requests.Session()

	def fetch_page(self, page: int) -> List[Dict[str, Any]]:
		"""Return the 'results' array of one page."""
		url = f"{self.settings.base_url}{self.ENDPOINT}"
		params = {
			'language': self.settings.language,
			'page': page,
			'api_key': self.settings.api_key,
		}
		try:
			response = self.session.get(url, params=params, timeout=self.settings.timeout_s)
		except requests.exceptions.RequestException as e:
			# the exception text carries the full URL, api_key included
			raise PageFetchError(page, f"request failed: {type(e).__name__}") from e

		if not response.ok:
			raise PageFetchError(page, f"HTTP {response.status_code}", status_code=response.status_code)

		try:
			body = response.json()
		except ValueError as e:
			raise PageFetchError(page, f"body is not JSON: {e}") from e

		results = body.get('results') if isinstance(body, dict) else None
		if not isinstance(results, list):
			raise PageFetchError(page, "body has no 'results' array")

		logger.debug(f"[TMDB] Page {page}: {len(results)} records")
		return results
