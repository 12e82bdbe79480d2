"""
Result presenter and exporter.
Renders a result list one line per movie, to a text stream or to a file.
"""

import sys  # default console stream
from pathlib import Path  # filesystem-safe paths
from typing import Iterable, List, Optional, TextIO  # type hints

from loguru import logger  # console logger

from .models import Movie  # catalog entry


def format_movie(movie: Movie, full_details: bool = False) -> str:
	"""Title only, or every field of the record."""
	return movie.describe() if full_details else movie.title


def render_results(movies: Iterable[Movie], full_details: bool = False) -> List[str]:
	return [format_movie(movie, full_details) for movie in movies]


def print_results(movies: Iterable[Movie], stream: Optional[TextIO] = None, full_details: bool = False) -> int:
	"""Write one line per movie to a stream (stdout by default). Returns the line count."""
	stream = stream or sys.stdout
	lines = render_results(movies, full_details)
	for line in lines:
		stream.write(line + '\n')
	return len(lines)


def write_results(movies: Iterable[Movie], path, full_details: bool = True) -> bool:
	"""
	Write one line per movie to a UTF-8 file.
	A failed write is logged and reported as False; the movies stay usable.
	"""
	path = Path(path)
	lines = render_results(movies, full_details)
	try:
		with open(path, 'w', encoding='utf-8') as f:
			for line in lines:
				f.write(line + '\n')
	except OSError as e:
		logger.error(f"[Export] Could not write results to {path}: {e}")
		return False
	logger.info(f"[Export] Saved {len(lines)} movies to {path}")
	return True


def format_favorites(favorites: Iterable[Movie]) -> List[str]:
	titles = [movie.title for movie in favorites]
	if not titles:
		return ["No favorite movies."]
	return ["Favorite Movies:"] + titles
