"""
Tests for CriteriaParser: keyword normalization, value parsing, genre names.
"""

import pytest

from movie_catalog.criteria_parser import CriteriaParser
from movie_catalog.models import FilterCriteria


@pytest.fixture(scope='module')
def parser():
	return CriteriaParser()


@pytest.mark.parametrize('keyword, field_name', [
	('title', 'title'),
	('partialTitle', 'partial_title'),
	('voteAverage', 'exact_vote_average'),
	('minVoteAverage', 'min_vote_average'),
	('MAXVOTEAVERAGE', 'max_vote_average'),
	('min_vote_average', 'min_vote_average'),
	('release date after', 'release_date_after'),
	('releaseDateBefore', 'release_date_before'),
	('genreIds', 'genre_ids'),
	('minVoteAvrage', 'min_vote_average'),  # typo
])
def test_normalize_keyword(parser, keyword, field_name):
	assert parser.normalize_keyword(keyword) == field_name


@pytest.mark.parametrize('keyword', ['', '   ', 'director', 'xyz'])
def test_unknown_keywords(parser, keyword):
	assert parser.normalize_keyword(keyword) is None


def test_apply_sets_one_field(parser):
	criteria = FilterCriteria(title='dark')
	assert parser.apply(criteria, 'minVoteAverage', ' 7.5 ') == 'min_vote_average'
	assert criteria.min_vote_average == 7.5
	assert criteria.title == 'dark'  # earlier refinements persist


@pytest.mark.parametrize('keyword, value', [
	('minVoteAverage', 'seven'),
	('voteAverage', 'nan'),
	('maxVoteAverage', ''),
	('genreIds', '28, cartoons'),
	('genreIds', ' , '),
	('title', '   '),
	('director', 'Nolan'),
])
def test_malformed_values_leave_criteria_untouched(parser, keyword, value):
	criteria = FilterCriteria(min_vote_average=6.0, genre_ids=[18])
	with pytest.raises(ValueError):
		parser.apply(criteria, keyword, value)
	assert criteria.active() == {'min_vote_average': 6.0, 'genre_ids': [18]}


def test_genres_by_id_name_synonym_and_typo(parser):
	assert parser.parse_genres('28,12') == [28, 12]
	assert parser.parse_genres('Action, comedy') == [28, 35]
	assert parser.parse_genres('sci-fi') == [878]
	assert parser.parse_genres('comdy') == [35]
	assert parser.parse_genres('28, action') == [28]  # duplicates collapse


def test_text_values_are_stripped(parser):
	criteria = FilterCriteria()
	parser.apply(criteria, 'releaseDateAfter', ' 2020-01-01 ')
	assert criteria.release_date_after == '2020-01-01'
