"""
Catalog fetcher module.
Sweeps a paged source into a deduplicated in-memory catalog, tolerating bad pages.
"""

import threading  # lock for concurrent inserts, event for cancellation
from concurrent.futures import ThreadPoolExecutor, as_completed  # optional parallel sweep
from typing import Dict, Iterable, Iterator, List, Optional  # type hints

from loguru import logger  # console logger

from .data_loader import DataLoader  # raw record -> Movie
from .errors import PageFetchError  # per-page failure
from .models import Movie  # catalog entry
from .page_source import PageSource  # collaborator protocol

# returned by a pooled fetch that started after cancellation
_SKIPPED = object()


class MovieCatalog:
	"""
	Insertion-ordered collection of movies keyed by identity (movie id).
	The first copy of an id wins; later copies from other pages are absorbed.
	Safe to fill from several threads.
	"""

	def __init__(self, movies: Optional[Iterable[Movie]] = None):
		self._movies: Dict[int, Movie] = {}  # identity key -> Movie
		self._lock = threading.Lock()
		for movie in movies or ():
			self.add(movie)

	def add(self, movie: Movie) -> bool:
		"""Insert the movie unless its id is already present. Returns True when inserted."""
		with self._lock:
			if movie.identity_key in self._movies:
				return False
			self._movies[movie.identity_key] = movie
			return True

	def add_all(self, movies: Iterable[Movie]) -> int:
		"""Insert every movie; return how many were new."""
		return sum(1 for movie in movies if self.add(movie))

	def get(self, movie_id: int) -> Optional[Movie]:
		"""Return the Movie for an id, or None if not found."""
		return self._movies.get(movie_id)

	def movies(self) -> List[Movie]:
		with self._lock:
			return list(self._movies.values())

	def __contains__(self, movie: Movie) -> bool:
		return movie.identity_key in self._movies

	def __len__(self) -> int:
		return len(self._movies)

	def __iter__(self) -> Iterator[Movie]:
		return iter(self.movies())


class CatalogFetcher:
	"""
	Pulls pages from a page source and parses them into Movie records.
	A failed or malformed page is logged and skipped; it never aborts a sweep.
	"""

	def __init__(self, source: PageSource, loader: Optional[DataLoader] = None):
		self.source = source  # collaborator returning raw records per page
		self.loader = loader or DataLoader()  # record parser
		self.last_sweep_failures = 0  # failed pages in the most recent fetch_all

	def fetch_page(self, page: int) -> List[Movie]:
		"""Fetch and parse one page; an unusable page yields an empty list."""
		movies = self._load_page(page)
		return movies if movies is not None else []

	def _load_page(self, page: int) -> Optional[List[Movie]]:
		# None marks a failed page, [] a page that simply had no movies
		try:
			records = self.source.fetch_page(page)
			if not isinstance(records, list):
				logger.warning(f"[Fetcher] Page {page} returned {type(records).__name__}, expected a list")
				return None
			return self.loader.parse_results(records, source=f"page {page}")
		except PageFetchError as e:
			logger.warning(f"[Fetcher] Failed to get page {page}: {e.reason}")
			return None
		except Exception as e:
			# a misbehaving source must not take the sweep down with it
			logger.warning(f"[Fetcher] Unexpected error on page {page}: {type(e).__name__}: {e}")
			return None

	def fetch_pages(self, pages: Iterable[int]) -> List[Movie]:
		"""Fetch a block of pages in order and concatenate their movies."""
		movies: List[Movie] = []
		for page in pages:
			movies.extend(self.fetch_page(page))
		return movies

	def fetch_all(
		self,
		total_pages: int,
		max_workers: int = 1,
		cancel_event: Optional[threading.Event] = None,
		catalog: Optional[MovieCatalog] = None,
	) -> MovieCatalog:
		"""
		Sweep pages 1..total_pages into a catalog deduplicated by movie id.
		With max_workers > 1 the pages are fetched concurrently.
		Setting cancel_event stops further fetches; what was inserted stays valid.
		"""
		catalog = catalog if catalog is not None else MovieCatalog()
		pages = range(1, total_pages + 1)
		logger.info(f"[Fetcher] Sweeping {total_pages} pages with {max_workers} worker(s)")

		failed = 0
		done = 0
		if max_workers <= 1:
			for page in pages:
				if cancel_event is not None and cancel_event.is_set():
					logger.info(f"[Fetcher] Sweep cancelled before page {page}")
					break
				movies = self._load_page(page)
				done += 1
				if movies is None:
					failed += 1
					continue
				catalog.add_all(movies)
		else:
			with ThreadPoolExecutor(max_workers=max_workers) as pool:
				futures = {pool.submit(self._fetch_unless_cancelled, page, cancel_event): page for page in pages}
				for future in as_completed(futures):
					movies = future.result()
					if movies is _SKIPPED:
						continue
					done += 1
					if movies is None:
						failed += 1
						continue
					catalog.add_all(movies)

		self.last_sweep_failures = failed
		logger.info(
			f"[Fetcher] Sweep finished | pages={done}/{total_pages} | failed={failed} | movies={len(catalog)}"
		)
		return catalog

	def _fetch_unless_cancelled(self, page: int, cancel_event: Optional[threading.Event]):
		if cancel_event is not None and cancel_event.is_set():
			return _SKIPPED
		return self._load_page(page)
