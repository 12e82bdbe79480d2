"""
Criteria parsing module.
Maps free-text criteria keywords onto FilterCriteria fields and parses user-entered values.
Tolerates casing, separators, and small typos in keywords and genre names.
"""

import math  # finite checks for numeric input
import re  # keyword normalization and list splitting
from typing import Any, Dict, List, Optional  # type annotations

from rapidfuzz import process, fuzz  # fuzzy matching utilities

from loguru import logger  # console logging

from .models import FilterCriteria  # the criteria being refined
from .data_loader import DataLoader  # for genre names and synonyms

# Minimum rapidfuzz ratio to accept a misspelled keyword or genre name
FUZZY_THRESHOLD = 88


def _squash(text: str) -> str:
	"""Lowercase and drop separators: 'minVoteAverage', 'min_vote average' -> 'minvoteaverage'."""
	return re.sub(r"[^a-z0-9]", "", text.lower())


class CriteriaParser:
	"""
	Parses interactive criteria refinements into FilterCriteria updates.
	A malformed value raises ValueError and leaves the criteria untouched.
	"""

	# Keyword spellings (squashed) → FilterCriteria field
	KEYWORD_ALIASES: Dict[str, str] = {
		'title': 'title',
		'partialtitle': 'partial_title',
		'voteaverage': 'exact_vote_average',
		'exactvoteaverage': 'exact_vote_average',
		'rating': 'exact_vote_average',
		'minvoteaverage': 'min_vote_average',
		'minrating': 'min_vote_average',
		'maxvoteaverage': 'max_vote_average',
		'maxrating': 'max_vote_average',
		'genreids': 'genre_ids',
		'genres': 'genre_ids',
		'genre': 'genre_ids',
		'releasedate': 'release_date',
		'releasedateafter': 'release_date_after',
		'after': 'release_date_after',
		'releasedatebefore': 'release_date_before',
		'before': 'release_date_before',
	}

	FLOAT_FIELDS = {'exact_vote_average', 'min_vote_average', 'max_vote_average'}

	# Keywords shown to users when prompting for a refinement
	DISPLAY_KEYWORDS = [
		'title', 'partialTitle', 'voteAverage', 'minVoteAverage', 'maxVoteAverage',
		'genreIds', 'releaseDate', 'releaseDateAfter', 'releaseDateBefore',
	]

	def __init__(self, loader: Optional[DataLoader] = None):
		self.loader = loader or DataLoader()
		# Pre-build lists for fuzzy search to avoid recreating on each parse
		self._keyword_list = list(self.KEYWORD_ALIASES)
		self._genre_list = [name.lower() for name in self.loader.genre_ids]
		self._genre_list.extend(self.loader.genre_synonyms)

	def normalize_keyword(self, raw: str) -> Optional[str]:
		"""Return the FilterCriteria field a keyword refers to, or None if unknown."""
		if not raw or not raw.strip():
			return None
		key = _squash(raw)
		if key in self.KEYWORD_ALIASES:
			return self.KEYWORD_ALIASES[key]
		match = process.extractOne(key, self._keyword_list, scorer=fuzz.ratio)
		if match and match[1] >= FUZZY_THRESHOLD:
			logger.debug(f"[Criteria] Keyword fuzzy match: '{raw}' -> '{match[0]}' (score={match[1]:.0f})")
			return self.KEYWORD_ALIASES[match[0]]
		logger.debug(f"[Criteria] Unknown keyword: '{raw}'")
		return None

	def parse_value(self, field_name: str, raw: str) -> Any:
		"""Convert raw user input into the value type of a criteria field."""
		if field_name not in FilterCriteria.field_names():
			raise ValueError(f"unknown criteria field '{field_name}'")
		text = (raw or '').strip()
		if not text:
			raise ValueError(f"a value is required for {field_name}")
		if field_name in self.FLOAT_FIELDS:
			return self._parse_float(text)
		if field_name == 'genre_ids':
			return self.parse_genres(text)
		return text

	def apply(self, criteria: FilterCriteria, keyword: str, raw_value: str) -> str:
		"""
		Set one criteria field from a keyword and raw value.
		Returns the field name that was set.
		"""
		field_name = self.normalize_keyword(keyword)
		if field_name is None:
			raise ValueError(f"unknown criteria '{keyword}'")
		value = self.parse_value(field_name, raw_value)  # parse first, then assign
		setattr(criteria, field_name, value)
		logger.info(f"[Criteria] {field_name} = {value!r}")
		return field_name

	def parse_genres(self, text: str) -> List[int]:
		"""Parse a comma-separated list of genre ids and/or genre names."""
		genre_ids: List[int] = []
		for token in (t.strip() for t in text.split(',')):
			if not token:
				continue
			genre_id = self._genre_token(token)
			if genre_id not in genre_ids:
				genre_ids.append(genre_id)
		if not genre_ids:
			raise ValueError("no genres given")
		return genre_ids

	def _genre_token(self, token: str) -> int:
		if re.fullmatch(r"[+-]?\d+", token):
			return int(token)
		genre_id = self.loader.genre_id_for(token)
		if genre_id is not None:
			return genre_id
		# Fuzzy match to handle small typos/variants
		match = process.extractOne(token.lower(), self._genre_list, scorer=fuzz.ratio)
		if match and match[1] >= FUZZY_THRESHOLD:
			logger.debug(f"[Criteria] Genre fuzzy match: '{token}' -> '{match[0]}' (score={match[1]:.0f})")
			return self.loader.genre_id_for(match[0])
		raise ValueError(f"unknown genre '{token}'")

	def _parse_float(self, text: str) -> float:
		try:
			value = float(text)
		except ValueError:
			raise ValueError(f"'{text}' is not a number") from None
		if not math.isfinite(value):
			raise ValueError(f"'{text}' is not a finite number")
		return value
