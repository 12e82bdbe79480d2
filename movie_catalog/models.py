"""
Data models for the movie catalog.
Defines the catalog entry and the filter criteria used throughout the system.

Two notions of "same movie" exist and must not be mixed up:
- identity: two records with the same ``id`` are the same catalog entry
  (favorites and the fetched catalog are keyed this way)
- value equality: ``==`` / ``hash`` compare every field (a plain ``set`` of movies)
"""

# Import dataclass helpers to define record-like classes without boilerplate
from dataclasses import dataclass, field, fields  # auto-generates __init__, __eq__, etc.
# Import typing helpers for precise and self-documenting types
from typing import Any, Dict, List, Optional, Tuple  # containers and optional values

# Year reported for movies whose release date is missing or too short
UNKNOWN_YEAR = 1800
# Year reported when the release date does not start with four digits
INVALID_YEAR = -1


@dataclass(frozen=True)
class Movie:
	"""
	Represents one catalog entry as returned by the remote API.
	Frozen: a record is built once per fetched/parsed item and never mutated.
	"""
	id: int  # stable catalog identifier, the identity key
	title: str = ''  # display title
	original_title: str = ''  # title in the original language
	original_language: str = ''  # ISO 639-1 code (e.g., "en")
	overview: str = ''  # short synopsis
	release_date: str = ''  # free-form, usually "YYYY-MM-DD"
	vote_average: float = 0.0  # average rating on a 0-10 scale
	vote_count: int = 0  # number of votes
	popularity: float = 0.0  # popularity score from the API
	genre_ids: Tuple[int, ...] = ()  # ordered genre ids; empty means no genre data
	adult: bool = False  # adult content flag
	video: bool = False  # video release flag

	@property
	def identity_key(self) -> int:
		"""Key used by identity-keyed containers (favorites, catalog)."""
		return self.id

	def same_movie(self, other: 'Movie') -> bool:
		"""True when both records describe the same catalog entry, whatever their details."""
		return self.identity_key == other.identity_key

	@property
	def year(self) -> int:
		"""Release year taken from the first four characters of the release date."""
		if not self.release_date or len(self.release_date) < 4:
			return UNKNOWN_YEAR
		try:
			return int(self.release_date[:4])
		except ValueError:
			return INVALID_YEAR

	@property
	def has_genres(self) -> bool:
		return bool(self.genre_ids)

	def to_dict(self) -> Dict[str, Any]:
		"""Render the snake_case record used by the catalog snapshot document."""
		data = {f.name: getattr(self, f.name) for f in fields(self)}
		data['genre_ids'] = list(self.genre_ids)  # JSON arrays, not tuples
		return data

	def describe(self) -> str:
		"""Single-line rendering of every field (full-detail display mode)."""
		return (
			f"Movie(id={self.id}, title={self.title!r}, original_title={self.original_title!r}, "
			f"original_language={self.original_language!r}, overview={self.overview!r}, "
			f"release_date={self.release_date!r}, vote_average={self.vote_average}, "
			f"vote_count={self.vote_count}, popularity={self.popularity}, "
			f"genre_ids={list(self.genre_ids)}, adult={self.adult}, video={self.video})"
		)


@dataclass
class FilterCriteria:
	"""
	The active filter constraints of a session.
	Every field is optional; an unset field (None) imposes no constraint.
	Fields are refined one at a time and persist across refinements.
	"""
	title: Optional[str] = None  # case-insensitive substring of the title
	partial_title: Optional[str] = None  # same matching as title, kept as its own refinement
	exact_vote_average: Optional[float] = None  # matches within +/- 0.1
	min_vote_average: Optional[float] = None  # inclusive lower bound
	max_vote_average: Optional[float] = None  # inclusive upper bound
	genre_ids: Optional[List[int]] = field(default=None)  # match any of these ids
	release_date: Optional[str] = None  # substring of the release date
	release_date_after: Optional[str] = None  # strict string comparison
	release_date_before: Optional[str] = None  # strict string comparison

	@classmethod
	def field_names(cls) -> List[str]:
		return [f.name for f in fields(cls)]

	def active(self) -> Dict[str, Any]:
		"""Return only the fields that are currently set."""
		return {name: getattr(self, name) for name in self.field_names() if getattr(self, name) is not None}

	def is_empty(self) -> bool:
		return not self.active()

	def reset(self) -> None:
		for name in self.field_names():
			setattr(self, name, None)
