"""
Data loading and parsing module.
Turns raw catalog records (API pages or the offline snapshot document) into Movie objects.
"""

# Standard libs for JSON parsing, typing, and paths
import json  # read/write the snapshot document
import math  # finite checks for numeric fields
from typing import Any, Dict, Iterable, List, Optional  # type hints
from pathlib import Path  # filesystem-safe paths

# Import our Movie data class used across the project
from .models import Movie  # structured movie record
from .errors import CatalogLoadError  # fatal batch-load failure

# Console logging
from loguru import logger  # console logger


class DataLoader:
	"""
	Handles loading and parsing of movie records.
	"""

	# TMDB movie genre table: canonical name → genre id
	GENRE_IDS = {
		'Action': 28,
		'Adventure': 12,
		'Animation': 16,
		'Comedy': 35,
		'Crime': 80,
		'Documentary': 99,
		'Drama': 18,
		'Family': 10751,
		'Fantasy': 14,
		'History': 36,
		'Horror': 27,
		'Music': 10402,
		'Mystery': 9648,
		'Romance': 10749,
		'Science Fiction': 878,
		'TV Movie': 10770,
		'Thriller': 53,
		'War': 10752,
		'Western': 37,
	}

	# Genre synonym mapping: common user phrasings → single standard name
	GENRE_SYNONYMS = {
		'sci-fi': 'Science Fiction',  # map hyphenated to canonical
		'sci fi': 'Science Fiction',  # map spaced form
		'scifi': 'Science Fiction',  # common variant
		'science-fiction': 'Science Fiction',  # map with dash
		'tv movie': 'TV Movie',
		'tv-movie': 'TV Movie',
		'funny': 'Comedy',
		'romantic': 'Romance',
		'animated': 'Animation',
		'historical': 'History',
		'musical': 'Music',
		'scary': 'Horror',
	}

	def __init__(self):
		"""Initialize the loader and expose the genre lookup tables."""
		self.genre_ids = self.GENRE_IDS  # canonical name -> id
		self.genre_names = {v: k for k, v in self.GENRE_IDS.items()}  # id -> canonical name
		self.genre_synonyms = self.GENRE_SYNONYMS  # variant -> canonical name

	def load_movies_from_json(self, filepath) -> List[Movie]:
		"""
		Load movies from a snapshot document shaped like an API page:
		{"results": [ {id, title, ...}, ... ]}
		A missing or unreadable document is fatal; malformed records are skipped.
		"""
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise CatalogLoadError(f"Movie catalog file not found: {filepath}")

		logger.info(f"[Loader] Loading movies from {filepath}...")

		try:
			with open(filepath, 'r', encoding='utf-8') as f:
				document = json.load(f)
		except json.JSONDecodeError as e:
			raise CatalogLoadError(f"Movie catalog file {filepath} is not valid JSON: {e}") from e
		except OSError as e:
			raise CatalogLoadError(f"Movie catalog file {filepath} could not be read: {e}") from e

		results = document.get('results') if isinstance(document, dict) else None
		if not isinstance(results, list):
			raise CatalogLoadError(f"Movie catalog file {filepath} has no 'results' array")

		movies = self.parse_results(results, source=str(filepath))
		logger.info(f"[Loader] Successfully loaded {len(movies)} movies.")  # summary
		return movies

	def save_movies_to_json(self, movies: Iterable[Movie], filepath) -> Path:
		"""Write movies as a snapshot document readable by load_movies_from_json."""
		filepath = Path(filepath)
		filepath.parent.mkdir(parents=True, exist_ok=True)  # ensure directory exists
		document = {'results': [movie.to_dict() for movie in movies]}
		with open(filepath, 'w', encoding='utf-8') as f:
			json.dump(document, f, ensure_ascii=False, indent=2)
		logger.info(f"[Loader] Wrote {len(document['results'])} movies to {filepath}")
		return filepath

	def parse_results(self, records: Iterable[Any], source: str = 'page') -> List[Movie]:
		"""
		Convert a list of raw records into Movie objects, skipping malformed entries.
		"""
		movies = []  # accumulator for parsed Movie objects
		for index, data in enumerate(records):  # keep position for diagnostics
			try:
				movies.append(self._parse_movie_data(data))
			except (TypeError, ValueError, OverflowError) as e:
				logger.warning(f"[Loader] Skipping malformed record #{index} from {source}: {e}")
				continue
		return movies

	def _parse_movie_data(self, data: Dict) -> Movie:
		"""
		Convert a raw dictionary (from an API page or file) into a Movie.
		Raises ValueError/TypeError/OverflowError when the record cannot describe a movie.
		"""
		if not isinstance(data, dict):
			raise TypeError(f"expected an object, got {type(data).__name__}")

		movie_id = data.get('id')
		if movie_id is None or isinstance(movie_id, bool):
			raise ValueError("record has no usable 'id'")

		return Movie(
			id=int(movie_id),
			title=self._text(data.get('title')),
			original_title=self._text(data.get('original_title')),
			original_language=self._text(data.get('original_language')),
			overview=self._text(data.get('overview')),
			release_date=self._text(data.get('release_date')),
			vote_average=self._finite(data.get('vote_average'), 'vote_average'),
			vote_count=int(data.get('vote_count') or 0),
			popularity=self._finite(data.get('popularity'), 'popularity'),
			genre_ids=self._parse_genre_ids(data.get('genre_ids')),
			adult=bool(data.get('adult', False)),
			video=bool(data.get('video', False)),
		)

	def _finite(self, value, name: str) -> float:
		# NaN and Infinity are valid JSON to the parsers but not valid scores
		number = float(value or 0.0)
		if not math.isfinite(number):
			raise ValueError(f"'{name}' must be finite, got {value!r}")
		return number

	def _text(self, value) -> str:
		# None and missing fields become empty strings
		return '' if value is None else str(value)

	def _parse_genre_ids(self, value) -> tuple:
		"""Absent or null genre data becomes an empty tuple."""
		if value is None:
			return ()
		if not isinstance(value, list):
			raise ValueError(f"'genre_ids' must be a list, got {type(value).__name__}")
		return tuple(int(g) for g in value)

	def genre_id_for(self, name: str) -> Optional[int]:
		"""Resolve a genre name (any case, or a known synonym) to its id."""
		if not name or not name.strip():
			return None
		key = name.strip().lower()
		canonical = self.genre_synonyms.get(key)
		if canonical:
			return self.genre_ids[canonical]
		for genre_name, genre_id in self.genre_ids.items():
			if genre_name.lower() == key:
				return genre_id
		return None

	def genre_name_for(self, genre_id: int) -> Optional[str]:
		return self.genre_names.get(genre_id)
