"""
Favorites module.
A membership set of movies keyed by movie id, not by full-record equality:
two copies of the same movie fetched at different times are one favorite.
"""

from typing import Dict, Iterator, List  # type hints

from loguru import logger  # console logger

from .models import Movie  # catalog entry


class FavoritesSet:
	"""Insertion-ordered favorites keyed by identity. No two members share an id."""

	def __init__(self):
		self._members: Dict[int, Movie] = {}  # identity key -> first copy added

	def add(self, movie: Movie) -> bool:
		"""Add the movie unless a member with the same id exists. Returns True when added."""
		if movie.identity_key in self._members:
			logger.debug(f"[Favorites] Already a favorite: {movie.title} ({movie.id})")
			return False
		self._members[movie.identity_key] = movie
		logger.info(f"[Favorites] Added {movie.title} ({movie.id})")
		return True

	def remove(self, movie: Movie) -> bool:
		"""Remove the member sharing this movie's id. Returns True when one was removed."""
		removed = self._members.pop(movie.identity_key, None)
		if removed is None:
			return False
		logger.info(f"[Favorites] Removed {removed.title} ({removed.id})")
		return True

	def contains(self, movie: Movie) -> bool:
		return movie.identity_key in self._members

	def toggle(self, movie: Movie) -> bool:
		"""Flip membership (like/unlike button). Returns the new membership state."""
		if self.contains(movie):
			self.remove(movie)
			return False
		self.add(movie)
		return True

	def list(self) -> List[Movie]:
		"""Members in the order they were added."""
		return list(self._members.values())

	def ids(self) -> List[int]:
		return list(self._members)

	def clear(self) -> None:
		self._members.clear()

	def __contains__(self, movie: Movie) -> bool:
		return self.contains(movie)

	def __len__(self) -> int:
		return len(self._members)

	def __iter__(self) -> Iterator[Movie]:
		return iter(self.list())
