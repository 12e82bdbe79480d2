"""
Tests for the Movie record: identity vs value equality, year extraction, rendering.
"""

import dataclasses

import pytest

from movie_catalog.models import FilterCriteria, Movie, UNKNOWN_YEAR, INVALID_YEAR


def test_identity_and_value_equality_differ():
	first = Movie(id=5, title='A', popularity=10.0)
	later = Movie(id=5, title='A', popularity=42.0)

	assert first.same_movie(later)
	assert first.identity_key == later.identity_key
	assert first != later
	assert len({first, later}) == 2  # a plain set compares every field


def test_movie_is_immutable():
	movie = Movie(id=1, title='A')
	with pytest.raises(dataclasses.FrozenInstanceError):
		movie.title = 'B'


@pytest.mark.parametrize('date, year', [
	('2019-01-01', 2019),
	('1999', 1999),
	('', UNKNOWN_YEAR),
	('99', UNKNOWN_YEAR),
	('soon', INVALID_YEAR),
])
def test_year(date, year):
	assert Movie(id=1, release_date=date).year == year


def test_describe_lists_every_field():
	movie = Movie(id=3, title='Gamma', genre_ids=(28,), vote_average=7.25, adult=True)
	text = movie.describe()
	for f in dataclasses.fields(Movie):
		assert f"{f.name}=" in text
	assert "genre_ids=[28]" in text
	assert "\n" not in text


def test_criteria_active_and_reset():
	criteria = FilterCriteria(title='dark', min_vote_average=7.0)
	assert criteria.active() == {'title': 'dark', 'min_vote_average': 7.0}
	assert not criteria.is_empty()
	criteria.reset()
	assert criteria.is_empty()
