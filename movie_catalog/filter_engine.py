"""
Filter engine module.
Evaluates the conjunction of the active criteria against a collection of movies.
"""

from typing import Iterable, List, Optional  # type annotations for clarity

# Import project modules for data structures and components
from .models import FilterCriteria, Movie  # core data classes
from .data_loader import DataLoader  # genre name lookup for quick search

# Import loguru for console logging
from loguru import logger  # simple structured logger

# Exact vote average matches within this band
VOTE_TOLERANCE = 0.1
# Float slack so that 7.5 vs 7.6 lands inside the band
_EPSILON = 1e-9


def _rejection(movie: Movie, criteria: FilterCriteria) -> Optional[str]:
	"""Return the name of the first criterion the movie fails, or None if it passes all of them."""
	title = (movie.title or '').lower()
	if criteria.title is not None and criteria.title.lower() not in title:
		return 'title'
	if criteria.partial_title is not None and criteria.partial_title.lower() not in title:
		return 'partial_title'

	vote = movie.vote_average
	if criteria.exact_vote_average is not None and abs(vote - criteria.exact_vote_average) > VOTE_TOLERANCE + _EPSILON:
		return 'exact_vote_average'
	if criteria.min_vote_average is not None and vote < criteria.min_vote_average:
		return 'min_vote_average'
	if criteria.max_vote_average is not None and vote > criteria.max_vote_average:
		return 'max_vote_average'

	# Genres: movie must carry at least one genre and share at least one with the criteria
	if criteria.genre_ids is not None:
		if not movie.has_genres:
			return 'genre_ids'
		wanted = set(criteria.genre_ids)
		if not any(g in wanted for g in movie.genre_ids):
			return 'genre_ids'

	# Dates compare as plain strings, no calendar parsing
	date = movie.release_date or ''
	if criteria.release_date is not None and criteria.release_date not in date:
		return 'release_date'
	if criteria.release_date_after is not None and not date > criteria.release_date_after:
		return 'release_date_after'
	if criteria.release_date_before is not None and not date < criteria.release_date_before:
		return 'release_date_before'
	return None


def matches(movie: Movie, criteria: FilterCriteria) -> bool:
	"""True when the movie satisfies every set criterion."""
	return _rejection(movie, criteria) is None


def filter_movies(movies: Iterable[Movie], criteria: FilterCriteria) -> List[Movie]:
	"""
	Keep the movies that satisfy every set criterion, preserving input order.
	Pure: neither the movies nor the criteria are modified.
	"""
	active = criteria.active()
	results: List[Movie] = []
	total = 0
	for movie in movies:
		total += 1
		reason = _rejection(movie, criteria)
		if reason is not None:
			logger.debug(f"[Filter] Filtered out by {reason} | movie={movie.title} ({movie.id})")
			continue
		results.append(movie)
	logger.info(f"[Filter] {len(results)} of {total} movies match {active or 'no criteria'}")
	return results


def quick_search(
	movies: Iterable[Movie],
	name: Optional[str] = None,
	from_year: Optional[int] = None,
	to_year: Optional[int] = None,
	genre_name: Optional[str] = None,
	min_rating: Optional[float] = None,
	loader: Optional[DataLoader] = None,
) -> List[Movie]:
	"""
	Search-box style lookup: name substring, genre by name, minimum rating,
	and an inclusive year window (only applied when both years are given).
	An unknown genre name and a zero rating impose no constraint.
	"""
	loader = loader or DataLoader()
	needle = name.lower() if name else None
	genre_id = loader.genre_id_for(genre_name) if genre_name else None
	if genre_name and genre_id is None:
		logger.debug(f"[Filter] Unknown genre '{genre_name}', ignoring genre constraint")
	use_years = from_year is not None and to_year is not None

	results: List[Movie] = []
	for movie in movies:
		if needle and needle not in (movie.title or '').lower():
			continue
		if genre_id is not None and genre_id not in movie.genre_ids:
			continue
		if min_rating and movie.vote_average < min_rating:
			continue
		if use_years and not (from_year <= movie.year <= to_year):
			continue
		results.append(movie)
	return results
